"""Permissive coercion of numeric query parameters.

Transport layers hand parameters over as strings, numbers or None. Absent or
malformed values fall back to the documented default instead of raising.
"""

from __future__ import annotations

from typing import Any


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def coerce_limit(value: Any, default: int) -> int:
    """Return `value` as a positive int, or `default` if absent, non-numeric or < 1."""
    n = _to_int(value)
    return n if n is not None and n > 0 else default


def coerce_offset(value: Any) -> int:
    """Return `value` as a non-negative int, or 0 if absent, non-numeric or negative."""
    n = _to_int(value)
    return n if n is not None and n >= 0 else 0
