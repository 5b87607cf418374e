from __future__ import annotations

import math
import re
from typing import Any

_DIGITS = re.compile(r"[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def is_integer(value: Any) -> bool:
    # bool is an int subclass but never a valid count in a response.
    return isinstance(value, int) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False

    if isinstance(value, int):
        return True

    return isinstance(value, float) and math.isfinite(value)


def non_negative_int_or(value: Any, default: int = 0) -> int:
    if is_integer(value) and value >= 0:
        return value

    return default


def bool_or(value: Any, default: bool = False) -> bool:
    return value if isinstance(value, bool) else default


def str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def parse_non_negative_int(value: str) -> int | None:
    """Parse a string made only of ASCII digits.

    Signs, whitespace, underscores and non-ASCII digits are all rejected, unlike `int()`.
    """
    if not _DIGITS.fullmatch(value):
        return None

    return int(value)


def parse_decimal(value: str) -> float | None:
    """Parse a plain decimal number with no surrounding whitespace or trailing characters."""
    if not _DECIMAL.fullmatch(value):
        return None

    parsed = float(value)

    return parsed if math.isfinite(parsed) else None


def parse_bool(value: str) -> bool | None:
    if value == "true":
        return True

    if value == "false":
        return False

    return None
