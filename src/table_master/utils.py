"""Shared utility functions for the tracker."""
from __future__ import annotations

import re

# Leading integer, the way a form field's text is read: "15", " -3", "12hp".
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(value, default=None):
    """Parse an integer from user or roster input, or return default.

    Handles the common shapes a roster field or console argument arrives in:
    ints pass through, strings are read up to the first non-digit, and
    anything else (None, floats with no leading digits, bools) falls back.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else default
    if isinstance(value, str):
        m = _LEADING_INT.match(value)
        if m:
            try:
                return int(m.group(1))
            except ValueError:
                # Past the interpreter's integer string conversion limit.
                return default
    return default


def normalize_id(value) -> str | None:
    """Coerce a roster id (int or str) to the string form combatants use."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None
