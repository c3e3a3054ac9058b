from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TypeVar

from src.application.errors import ValidationError
from src.utils.datetime_tz import parse_iso_date

EnumT = TypeVar("EnumT", bound=Enum)

# Storage keeps money and weight to the cent
CENTS = Decimal("0.01")


def require_text(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required", details={"field": field_name})
    return str(value).strip()


def optional_text(value: str | None) -> str:
    return (value or "").strip()


def require_date(value: date | str | None, field_name: str) -> date:
    parsed = parse_iso_date(value)
    if parsed is None:
        raise ValidationError(f"{field_name} must be a valid date", details={"field": field_name})
    return parsed


def optional_date(value: date | str | None, field_name: str) -> date | None:
    if value is None or value == "":
        return None
    return require_date(value, field_name)


def to_amount(value: Decimal | float | int | str | None, field_name: str) -> Decimal | None:
    """Non-negative Decimal, or None when no value was given."""
    if value is None or value == "":
        return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(
            f"{field_name} must be a number", details={"field": field_name}
        ) from exc
    if not amount.is_finite() or amount < 0:
        raise ValidationError(
            f"{field_name} must be zero or positive", details={"field": field_name}
        )
    try:
        cents = amount.quantize(CENTS)
    except InvalidOperation as exc:
        raise ValidationError(f"{field_name} is too large", details={"field": field_name}) from exc
    if amount != cents:
        raise ValidationError(
            f"{field_name} allows at most two decimal places", details={"field": field_name}
        )
    return amount


def require_amount(value: Decimal | float | int | str | None, field_name: str) -> Decimal:
    amount = to_amount(value, field_name)
    if amount is None:
        raise ValidationError(f"{field_name} is required", details={"field": field_name})
    return amount


def require_choice(enum_type: type[EnumT], value: str | EnumT | None, field_name: str) -> EnumT:
    try:
        return enum_type(value)
    except ValueError as exc:
        allowed = [member.value for member in enum_type]
        raise ValidationError(
            f"{field_name} must be one of {', '.join(allowed)}",
            details={"field": field_name, "allowed": allowed},
        ) from exc
