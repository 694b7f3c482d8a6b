"""Stagger normalization and per-target start offsets."""

from __future__ import annotations

import random

from revelo.core.curves.registry import EaseRegistry
from revelo.core.text.models import Origin, StaggerSpec


def normalize_stagger(
    stagger: float | StaggerSpec | None,
    origin: Origin | None = None,
) -> StaggerSpec:
    """Normalize a tier's stagger into a StaggerSpec.

    A bare number ``s`` becomes ``StaggerSpec(amount=s, from_=origin)`` with
    ``origin`` defaulting to start. A StaggerSpec is returned as-is (same
    object). None means no stagger.
    """
    if isinstance(stagger, StaggerSpec):
        return stagger
    return StaggerSpec(amount=float(stagger or 0.0), from_=origin or Origin.START)


def _distances(origin: Origin | int, count: int, rng: random.Random) -> list[float]:
    last = count - 1
    middle = last / 2
    if isinstance(origin, int) and not isinstance(origin, Origin):
        anchor = min(max(origin, 0), last)
        return [float(abs(i - anchor)) for i in range(count)]
    if origin is Origin.END:
        return [float(last - i) for i in range(count)]
    if origin is Origin.CENTER:
        return [abs(i - middle) for i in range(count)]
    if origin is Origin.EDGES:
        return [middle - abs(i - middle) for i in range(count)]
    if origin is Origin.RANDOM:
        order = list(range(count))
        rng.shuffle(order)
        return [float(position) for position in order]
    return [float(i) for i in range(count)]


def stagger_offsets(
    spec: StaggerSpec,
    count: int,
    eases: EaseRegistry | None = None,
    rng: random.Random | None = None,
) -> list[float]:
    """Compute the start offset of every target.

    ``each`` spaces neighbours by a fixed delay; ``amount`` spreads the whole
    group across that many seconds. Distances are measured from the origin
    and remapped through the stagger ease when one is set.

    Args:
        spec: Normalized stagger.
        count: Number of targets.
        eases: Registry used to resolve ``spec.ease``.
        rng: Random source for the random origin.

    Returns:
        List of offsets in seconds, one per target.

    Raises:
        UnknownEaseError: If the stagger ease cannot be resolved.
    """
    if count <= 0:
        return []
    distances = _distances(spec.from_, count, rng or random.Random())
    furthest = max(distances)
    if furthest <= 0:
        return [0.0] * count

    if spec.amount is not None:
        total = spec.amount
    elif spec.each is not None:
        total = spec.each * furthest
    else:
        return [0.0] * count

    ease = eases.resolve(spec.ease) if spec.ease and eases is not None else None
    offsets = []
    for distance in distances:
        ratio = distance / furthest
        if ease is not None:
            ratio = ease(ratio)
        offsets.append(ratio * total)
    return offsets


__all__ = [
    "normalize_stagger",
    "stagger_offsets",
]
