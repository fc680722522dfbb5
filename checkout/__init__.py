"""
Checkout package initialization.
Exposes the payment coordinator and its result types.
"""

from .coordinator import PaymentAttempt, PaymentConfigurationError, PaymentCoordinator
from .dropin import DropInResult
from .outcomes import PaymentOutcome, PaymentResult

__all__ = [
    "PaymentAttempt",
    "PaymentConfigurationError",
    "PaymentCoordinator",
    "DropInResult",
    "PaymentOutcome",
    "PaymentResult",
]
