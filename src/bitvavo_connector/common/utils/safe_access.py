"""
Safe Extraction
===============

Typed accessors for untyped JSON records. Each accessor returns ``None``
when the key is missing or the value has the wrong shape; none of them raise
and none of them fall back to a zero value, so "unknown" stays distinct from
"zero" all the way into the canonical models.
"""

import math
from collections.abc import Mapping
from typing import Any


def safe_value(record: Any, key: str, default: Any = None) -> Any:
    """Return ``record[key]`` as-is, or ``default`` when absent or ``None``."""
    if not isinstance(record, Mapping):
        return default
    value = record.get(key)
    return default if value is None else value


def safe_string(record: Any, key: str, default: str | None = None) -> str | None:
    """Return the value as a string.

    Numbers are rendered with ``str``; containers and booleans are rejected.
    """
    value = safe_value(record, key)
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return default


def safe_float(record: Any, key: str, default: float | None = None) -> float | None:
    """Return the value as a float.

    Accepts numbers and numeric strings (Bitvavo sends most amounts as
    strings, e.g. ``"0.001"``). Empty, non-numeric and non-finite values
    resolve to ``default``, as do integers too large for a float and
    Python-only spellings such as ``"1_000"``.
    """
    value = safe_value(record, key)
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            return default
    elif isinstance(value, str):
        if "_" in value:
            return default
        try:
            result = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    return result if math.isfinite(result) else default


def safe_integer(record: Any, key: str, default: int | None = None) -> int | None:
    """Return the value as an int.

    Floats are truncated and numeric strings are parsed; anything else
    resolves to ``default``.
    """
    value = safe_value(record, key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        if "_" in value:
            return default
        try:
            return int(value.strip())
        except ValueError:
            parsed = safe_float(record, key)
            return int(parsed) if parsed is not None else default
    return default
