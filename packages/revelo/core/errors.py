"""Domain exceptions for Revelo."""

from __future__ import annotations


class RevealError(Exception):
    """Base class for errors raised by the Revelo core."""


class UnknownEaseError(RevealError, ValueError):
    """Raised when an ease expression cannot be resolved by the registry."""

    def __init__(self, expression: str) -> None:
        super().__init__(f"Unknown ease: {expression!r}")
        self.expression = expression


class EasePathError(RevealError, ValueError):
    """Raised when custom ease path data cannot be parsed."""


__all__ = [
    "EasePathError",
    "RevealError",
    "UnknownEaseError",
]
