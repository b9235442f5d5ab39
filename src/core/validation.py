"""
Input models for the signal service and the pydantic-to-ValidationError bridge.
"""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, Literal, Optional, Type, TypeVar
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from src.core.exceptions import ValidationError

ModelT = TypeVar('ModelT', bound=BaseModel)

# Finite real number; ints are accepted, bools and numeric strings are not
FiniteNumber = Annotated[float, Field(strict=True, allow_inf_nan=False)]
NonNegativeInt = Annotated[StrictInt, Field(ge=0)]


class InputModel(BaseModel):
    """Accepts snake_case and camelCase keys, ignores unknown ones."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )


def _field_name(model_cls: Type[BaseModel], loc: tuple) -> str:
    if not loc:
        return "body"
    head = loc[0]
    for name, info in model_cls.model_fields.items():
        if head == name or head == info.alias:
            return name
    return str(head)


def validate(model_cls: Type[ModelT], payload: Any) -> ModelT:
    """
    Validate a payload against an input model.

    Raises:
        ValidationError: listing every violated field
    """
    if not isinstance(payload, dict):
        raise ValidationError([{"field": "body", "message": "expected an object"}])

    try:
        return model_cls.model_validate(payload)
    except PydanticValidationError as e:
        errors = []
        seen = set()
        for error in e.errors():
            field = _field_name(model_cls, error.get("loc", ()))
            if field in seen:
                continue
            seen.add(field)
            errors.append({"field": field, "message": error.get("msg", "invalid")})
        raise ValidationError(errors) from e


class SignalUpdate(InputModel):
    """Partial update of a signal's mutable fields."""
    status: Optional[Literal['pending', 'active', 'closed', 'expired']] = None
    result: Optional[Literal['win', 'loss', 'break_even', 'pending']] = None
    timeframe: Optional[Annotated[StrictStr, Field(min_length=1, max_length=10)]] = None


class SignalHistoryEntry(InputModel):
    """Execution outcome for a signal."""
    executed_at: Optional[datetime] = None
    amount: Optional[FiniteNumber] = None
    entry_price: Optional[FiniteNumber] = None
    exit_price: Optional[FiniteNumber] = None
    profit: Optional[FiniteNumber] = None
    profit_percent: Optional[FiniteNumber] = None
    duration: Optional[NonNegativeInt] = None
    notes: Optional[StrictStr] = None


class AssetConfigInput(InputModel):
    """Fields of an asset config upsert."""
    name: Optional[Annotated[StrictStr, Field(max_length=100)]] = None
    is_monitored: Optional[Literal['yes', 'no']] = None
    category: Optional[Annotated[StrictStr, Field(max_length=20)]] = None
    last_signal_at: Optional[datetime] = None
    total_signals: Optional[NonNegativeInt] = None
    win_rate: Optional[Annotated[Decimal, Field(ge=0, le=100, allow_inf_nan=False)]] = None

    @field_validator('is_monitored', 'total_signals', mode='before')
    @classmethod
    def not_null(cls, value):
        # NOT NULL columns: omit the field to keep the stored value
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


def provided_fields(model: BaseModel) -> Dict[str, Any]:
    """Fields the caller actually sent, by attribute name."""
    return model.model_dump(exclude_unset=True)
