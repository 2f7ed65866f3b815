from __future__ import annotations

import math
import re
from datetime import date
from typing import Any, Mapping

from ..core.exceptions import ValidationError
from .datetime_utils import coerce_date

_LEADING_INT = re.compile(r"^\s*([-+]?\d+)")


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_field(fields: Mapping[str, Any], field_name: str) -> Any:
    value = fields.get(field_name)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    return value


def require_int(value: Any, field_name: str) -> int:
    """Strict integer parse for form input: rejects blanks and non-numbers."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and re.fullmatch(r"\s*[-+]?\d+\s*", value):
        return int(value)
    raise ValidationError(f"{field_name} must be a whole number")


def require_int_in_range(value: Any, field_name: str, low: int, high: int) -> int:
    number = require_int(value, field_name)
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def require_date(value: Any, field_name: str = "Date") -> date:
    try:
        return coerce_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format") from None


def parse_count(value: Any) -> int:
    """Lenient count parse used by spreadsheet import.

    Missing, blank or non-numeric values become 0. Strings keep their leading
    integer ("25 students" -> 25), floats are truncated.
    """

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0
