"""Conversion of behave step tables and response bodies."""

import re
from typing import Any, Dict, List

_INT_RE = re.compile(r"^\d+$")
_FLOAT_RE = re.compile(r"^\d+\.\d+$")
_BOOL_RE = re.compile(r"^(true|false)$", re.IGNORECASE)

_MISSING = object()


def coerce(value: str) -> Any:
    """Digits -> int, decimals -> float, true/false -> bool, else the string."""
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    if _BOOL_RE.match(value):
        return value.lower() == "true"
    return value


def rows_hash(table) -> Dict[str, Any]:
    """Turn a two-column key/value table into a dict with coerced values.

    behave always treats the first row as headings, so it is a pair too.
    """
    pairs: List[List[str]] = [list(table.headings)] + [list(row.cells) for row in table]
    result = {}
    for pair in pairs:
        if len(pair) != 2:
            raise ValueError(f"Expected a two-column table, got row {pair!r}")
        key, value = pair
        result[key.strip()] = coerce(value.strip())
    return result


def first_row(table) -> Dict[str, str]:
    """First data row of a table with a header row, keyed by heading."""
    for row in table:
        return {heading: row[heading] for heading in table.headings}
    return {}


def get_by_path(obj: Any, path: str, default: Any = None) -> Any:
    """Walk dicts and lists by a dotted path such as ``data.price``."""
    current = obj
    for key in path.split("."):
        if current is None:
            return default
        if isinstance(current, dict):
            current = current.get(key, _MISSING)
        elif isinstance(current, list) and key.isdigit() and int(key) < len(current):
            current = current[int(key)]
        else:
            current = _MISSING
        if current is _MISSING:
            return default
    return current
