"""JSON utilities with numpy, enum and Path support."""

from __future__ import annotations

from enum import Enum
import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)


def _json_default(obj: Any) -> Any:
    """JSON serializer for types not supported by default.

    Handles:
    - pathlib.Path -> str
    - Enum -> value
    - numpy arrays -> list
    - numpy scalars -> Python scalars
    - anything else (e.g. value producers) -> repr string
    """
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)

    return repr(obj)


def dumps(obj: Any) -> str:
    """Serialize to pretty-printed JSON."""
    return json.dumps(obj, indent=2, ensure_ascii=False, default=_json_default)


def write_json(path: str | Path, obj: Any) -> None:
    """Write object to JSON file with pretty formatting.

    Args:
        path: Output file path
        obj: Object to serialize
    """
    path_obj = Path(path)
    path_obj.parent.mkdir(parents=True, exist_ok=True)
    path_obj.write_text(dumps(obj), encoding="utf-8")


def read_json(path: str | Path) -> dict[str, Any]:
    """Read and parse JSON file.

    Args:
        path: Input file path

    Returns:
        Parsed JSON as dictionary

    Raises:
        ValueError: If the document is not a JSON object.
    """
    data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")
    return data


__all__ = [
    "dumps",
    "read_json",
    "write_json",
]
