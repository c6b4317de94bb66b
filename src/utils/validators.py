"""Lightweight validation helpers for request parameters."""

from typing import Any, Optional

from utils.error_handling import BadRequestError


def ensure_present(value: Any, field: str) -> None:
    """Raise BadRequestError if value is falsy."""
    if value in (None, "", []):
        raise BadRequestError(f"{field} is required")


def parse_positive_int(value: Optional[str], field: str, default: int) -> int:
    """Parse an optional query-string integer, falling back to ``default``."""
    if value in (None, ""):
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise BadRequestError(f"{field} must be an integer")
    if parsed < 1:
        raise BadRequestError(f"{field} must be positive")
    return parsed
