"""
Payment Outcomes Module

This module defines the closed set of outcomes a payment attempt can end with
and the result object handed to completion callbacks.
"""

from enum import Enum as PyEnum

from pydantic import BaseModel, ConfigDict


class PaymentOutcome(PyEnum):
    success = 100
    failed = 101
    cancelled = 102
    unknown = 103

    @property
    def code(self) -> int:
        return self.value

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    @classmethod
    def from_code(cls, code: int) -> "PaymentOutcome":
        return cls(code)


_MESSAGES = {
    PaymentOutcome.success: "Payment has been done!",
    PaymentOutcome.failed: "Payment has been failed!",
    PaymentOutcome.cancelled: "Payment has been cancelled!",
    PaymentOutcome.unknown: "Something went wrong please try again!",
}


class PaymentResult(BaseModel):
    """Final result of one payment attempt."""

    outcome: PaymentOutcome
    code: int
    message: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, outcome: PaymentOutcome, message: str | None = None) -> "PaymentResult":
        """Build a result, using the outcome's fixed message unless one is given."""
        return cls(outcome=outcome, code=outcome.code, message=message or outcome.message)

    @property
    def success(self) -> bool:
        return self.code == PaymentOutcome.success.code
