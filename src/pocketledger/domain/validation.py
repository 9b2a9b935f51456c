"""Input validation helpers shared by the domain services.

All helpers raise ValidationError before any balance is touched.
"""

import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pocketledger.domain.errors import ValidationError, invalid_choice


MONEY_PLACES = 2
QUANTITY_PLACES = 4


def to_decimal(value: Any, field: str, places: int = MONEY_PLACES) -> Decimal:
    """Convert a money value to an exact Decimal.

    Floats go through their string form so that 0.1 becomes Decimal("0.1").
    Values with more than `places` significant decimals are rejected rather
    than rounded by the storage column.

    Raises:
        ValidationError: If the value is not a finite number or too precise
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"{field} must be a number, got '{value}'")
    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    try:
        quantized = result.quantize(Decimal(1).scaleb(-places))
    except InvalidOperation:
        raise ValidationError(f"{field} is too large, got '{value}'")
    if quantized != result:
        raise ValidationError(f"{field} allows at most {places} decimal places, got '{value}'")
    return result


def optional_decimal(value: Any, field: str, places: int = MONEY_PLACES) -> Optional[Decimal]:
    """Like to_decimal, but lets None through."""
    if value is None:
        return None
    return to_decimal(value, field, places)


def require_positive(value: Any, field: str) -> Decimal:
    amount = to_decimal(value, field)
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return amount


def require_non_negative(value: Any, field: str) -> Decimal:
    amount = to_decimal(value, field)
    if amount < 0:
        raise ValidationError(f"{field} must not be negative")
    return amount


def require_month(value: Any, field: str = "month") -> int:
    month = _to_int(value, field)
    if not 1 <= month <= 12:
        raise ValidationError(f"{field} must be between 1 and 12, got {month}")
    return month


def require_year(value: Any, field: str = "year") -> int:
    year = _to_int(value, field)
    if not 1 <= year <= 9999:
        raise ValidationError(f"{field} must be between 1 and 9999, got {year}")
    return year


def require_day_of_month(value: Any, field: str) -> int:
    day = _to_int(value, field)
    if not 1 <= day <= 31:
        raise ValidationError(f"{field} must be between 1 and 31, got {day}")
    return day


def require_choice(value: Any, field: str, choices: tuple[str, ...]) -> str:
    if value not in choices:
        raise ValidationError(invalid_choice(field, value, choices))
    return value


def require_date(value: Any, field: str = "date") -> datetime.date:
    """Accept a date, or a datetime reduced to its date."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    raise ValidationError(f"{field} must be a date, got '{value}'")


def require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must not be empty")
    return value.strip()


def _to_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer, got '{value}'")
