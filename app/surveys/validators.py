"""Permissive parsing helpers for survey form input"""
import re
from typing import Any, NamedTuple

# Leading integer, the way a browser number input is read
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class ParsedInt(NamedTuple):
    """Parsed integer plus whether the default had to be applied"""
    value: int
    defaulted: bool


def parse_int_or_default(raw: Any, default: int = 0, minimum: int = 0) -> ParsedInt:
    """
    Parse a form value into an integer, falling back to a default.

    Accepts ints, floats (truncated) and strings with a leading integer
    ("12", " 7 years", "3.9"). Anything else, or a result below ``minimum``,
    yields ``default``.
    """
    value = None
    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if raw == raw and raw not in (float("inf"), float("-inf")):
            value = int(raw)
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if match:
            value = int(match.group(1))

    if value is None or value < minimum:
        return ParsedInt(default, True)
    return ParsedInt(value, False)
