"""
Merchant Server Confirmation

Posts the drop-in nonce to the merchant's server and maps the reply onto a
PaymentResult. There is no retry: the request either completes or fails.
"""

import requests

from checkout.models import ConfirmationPayload, ServerResponse
from checkout.outcomes import PaymentOutcome, PaymentResult

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


class ConfirmationClient:
    def __init__(self, timeout: float | None = None):
        # None keeps the HTTP stack's default behaviour
        self.timeout = timeout

    def confirm(self, url: str, payload: ConfirmationPayload) -> PaymentResult:
        try:
            response = requests.post(
                url,
                data=payload.to_form_body().encode("utf-8"),
                headers=FORM_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            return PaymentResult.of(PaymentOutcome.unknown, str(e))

        if not response.content:
            return PaymentResult.of(PaymentOutcome.unknown)

        return PaymentResult.of(ServerResponse.interpret(response.content))
