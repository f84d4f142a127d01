"""
Checks run on payment form input before anything is sent to the backend.

Both validators return ``(payload, errors)``: the typed request model and an
empty list, or ``None`` and the field errors. Numeric strings are coerced
("1000" -> 1000.0, "2024" -> 2024); anything unparseable is rejected.
"""
from typing import Any, Mapping, Optional, Type, TypeVar, Union
from pydantic import BaseModel, ValidationError
from app.schemas.common import FieldError
from app.schemas.payment import PendingPaymentCreate, DepositPaymentCreate

M = TypeVar("M", bound=PendingPaymentCreate)

PaymentInput = Union[Mapping[str, Any], BaseModel]


class PaymentValidationError(ValueError):
    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        fields = ", ".join(e.field for e in errors)
        super().__init__(f"Invalid payment input: {fields}")


def _as_dict(data: PaymentInput) -> dict:
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True)
    return dict(data)


def _blank_to_none(raw: dict) -> dict:
    # Empty form controls are "missing", not values to coerce
    return {k: (None if isinstance(v, str) and not v.strip() else v) for k, v in raw.items()}


def _validate(model: Type[M], data: PaymentInput) -> tuple[Optional[M], list[FieldError]]:
    if isinstance(data, model):
        return data, []

    try:
        payload = model.model_validate(_blank_to_none(_as_dict(data)))
    except ValidationError as e:
        errors = []
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "input"
            missing = err["type"] == "missing" or err.get("input") is None
            message = "This field is required" if missing else err["msg"]
            errors.append(FieldError(field=field, message=message))
        return None, errors

    return payload, []


def validate_pending_payment(data: PaymentInput) -> tuple[Optional[PendingPaymentCreate], list[FieldError]]:
    return _validate(PendingPaymentCreate, data)


def validate_deposit_payment(data: PaymentInput) -> tuple[Optional[DepositPaymentCreate], list[FieldError]]:
    return _validate(DepositPaymentCreate, data)
