"""
Checkout Models Module

This module defines Pydantic models for:
- The per-attempt payment request
- The request handed to the drop-in UI
- The confirmation payload posted to the merchant server
- Interpretation of the merchant server's response
"""

import json
from decimal import Decimal

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from checkout.outcomes import PaymentOutcome

_URL_ADAPTER = TypeAdapter(AnyHttpUrl)


def to_decimal(value):
    """Render numbers the way a double does: 12.5 stays 12.5, 10 becomes 10.0."""
    if isinstance(value, int) and not isinstance(value, bool):
        value = float(value)
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def format_amount(amount: Decimal) -> str:
    """Default decimal-to-string rendering, e.g. ``12.5`` or ``10.0``."""
    return str(amount)


class PaymentRequest(BaseModel):
    """Everything needed for exactly one payment attempt."""

    amount: Decimal
    currency_code: str
    tokenization_key: str
    server_url: str

    model_config = ConfigDict(frozen=True)

    @field_validator("amount", mode="before")
    @classmethod
    def amount_as_decimal(cls, value):
        return to_decimal(value)

    @field_validator("server_url")
    @classmethod
    def validate_server_url(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("server payment url must not be empty")
        # Validate only; the url is posted to exactly as the caller gave it
        try:
            _URL_ADAPTER.validate_python(value)
        except ValidationError as e:
            raise ValueError(f"invalid server payment url: {value!r}") from e
        return value


class DropInRequest(BaseModel):
    amount: str
    currency_code: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_payment_request(cls, request: PaymentRequest) -> "DropInRequest":
        return cls(
            amount=format_amount(request.amount),
            currency_code=request.currency_code,
        )


class ConfirmationPayload(BaseModel):
    nonce: str
    amount: Decimal

    model_config = ConfigDict(frozen=True)

    @field_validator("amount", mode="before")
    @classmethod
    def amount_as_decimal(cls, value):
        return to_decimal(value)

    def to_form_body(self) -> str:
        # "nounce" is what merchant servers expect on the wire
        return f"nounce={self.nonce}&amount={format_amount(self.amount)}"


def status_text(value) -> str:
    """String form of a JSON status, with booleans and numbers rendered as
    one numeric type: ``true`` reads as ``"1"`` and ``1.0`` as ``"1"``.
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ServerResponse:
    """Interprets the merchant server's ``{"status": ...}`` reply."""

    SUCCESS_STATUS = "1"

    @classmethod
    def interpret(cls, body: bytes) -> PaymentOutcome:
        try:
            data = json.loads(body)
        except ValueError:
            return PaymentOutcome.failed

        if not isinstance(data, dict) or "status" not in data:
            return PaymentOutcome.failed

        status = data["status"]
        if status is not None and status_text(status) == cls.SUCCESS_STATUS:
            return PaymentOutcome.success
        return PaymentOutcome.failed
