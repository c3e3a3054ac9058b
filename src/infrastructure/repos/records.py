"""Storage-shape schemas used to normalize records on every read and write.

Each schema accepts both the canonical snake_case keys and the camelCase keys
written by earlier versions of the app (``animalType``, ``sheepId``,
``dateAdded``...), fills defaults for missing values and dumps the canonical
shape. Money and weight are rounded to the cent, the precision both storage
backends hold. Normalizing an already-normalized record returns it unchanged.
"""

from __future__ import annotations

from datetime import date as DtDate
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, ClassVar, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from src.application.errors import ValidationError
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.animal_type import AdditionType, AnimalType
from src.domain.value_objects.health_record_type import HealthRecordType
from src.domain.value_objects.transaction_type import TransactionType
from src.utils.datetime_tz import local_today


def _aliases(name: str, legacy: str) -> AliasChoices:
    return AliasChoices(name, legacy)


def _to_cents(value: Decimal | None) -> Decimal | None:
    # Both backends hold money and weight to two places; old float data may carry more
    if value is None:
        return None
    try:
        return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError("value is too large") from exc


class _StoredRecord(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra="ignore")

    # Keys whose empty-string value means "not set" (blank form inputs)
    blank_as_missing: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def drop_unset_values(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        return {
            key: value
            for key, value in data.items()
            if value is not None and not (value == "" and key in cls.blank_as_missing)
        }


class AnimalRecord(_StoredRecord):
    blank_as_missing = frozenset(
        {
            "animal_type",
            "animalType",
            "birth_date",
            "birthDate",
            "purchase_cost",
            "purchaseCost",
            "status",
            "addition_type",
            "additionType",
            "date_added",
            "dateAdded",
        }
    )

    id: str = Field(min_length=1)
    animal_type: AnimalType = Field(
        AnimalType.SHEEP, validation_alias=_aliases("animal_type", "animalType")
    )
    gender: str
    birth_date: DtDate | None = Field(None, validation_alias=_aliases("birth_date", "birthDate"))
    purchase_cost: Decimal = Field(
        Decimal("0"), ge=0, validation_alias=_aliases("purchase_cost", "purchaseCost")
    )
    notes: str = ""
    status: AnimalStatus = AnimalStatus.ACTIVE
    addition_type: AdditionType = Field(
        AdditionType.PURCHASE, validation_alias=_aliases("addition_type", "additionType")
    )
    date_added: DtDate = Field(
        default_factory=local_today, validation_alias=_aliases("date_added", "dateAdded")
    )

    @field_validator("purchase_cost")
    @classmethod
    def cost_to_cents(cls, value: Decimal) -> Decimal:
        return _to_cents(value)

    @model_validator(mode="after")
    def zero_cost_for_births(self) -> AnimalRecord:
        if self.addition_type == AdditionType.BIRTH:
            self.purchase_cost = Decimal("0")
        return self


class TransactionRecord(_StoredRecord):
    blank_as_missing = frozenset({"sheep_id", "sheepId", "date_added", "dateAdded"})

    id: str = Field(min_length=1)
    type: TransactionType
    sheep_id: str | None = Field(None, validation_alias=_aliases("sheep_id", "sheepId"))
    amount: Decimal = Field(ge=0)
    date: DtDate
    description: str
    date_added: DtDate = Field(
        default_factory=local_today, validation_alias=_aliases("date_added", "dateAdded")
    )

    @field_validator("amount")
    @classmethod
    def amount_to_cents(cls, value: Decimal) -> Decimal:
        return _to_cents(value)


class HealthRecordRecord(_StoredRecord):
    blank_as_missing = frozenset({"weight", "date_added", "dateAdded"})

    id: str = Field(min_length=1)
    sheep_id: str = Field(min_length=1, validation_alias=_aliases("sheep_id", "sheepId"))
    type: HealthRecordType
    weight: Decimal | None = Field(None, ge=0)
    medication: str = ""
    date: DtDate
    notes: str = ""
    date_added: DtDate = Field(
        default_factory=local_today, validation_alias=_aliases("date_added", "dateAdded")
    )

    @field_validator("weight")
    @classmethod
    def weight_to_cents(cls, value: Decimal | None) -> Decimal | None:
        return _to_cents(value)


def _normalize(schema: type[_StoredRecord], raw: Mapping[str, Any]) -> dict[str, Any]:
    try:
        return schema.model_validate(dict(raw)).model_dump()
    except PydanticValidationError as exc:
        raise ValidationError(
            f"Invalid {schema.__name__} {raw.get('id')!r}",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ) from exc


def normalize_animal(raw: Mapping[str, Any]) -> dict[str, Any]:
    return _normalize(AnimalRecord, raw)


def normalize_transaction(raw: Mapping[str, Any]) -> dict[str, Any]:
    return _normalize(TransactionRecord, raw)


def normalize_health_record(raw: Mapping[str, Any]) -> dict[str, Any]:
    return _normalize(HealthRecordRecord, raw)
