"""
Payment Coordinator

Runs one checkout attempt end to end:
- presents the drop-in UI on the host surface
- turns the drop-in's answer into an outcome, or forwards the nonce to the
  merchant server for confirmation
- resolves the attempt exactly once and notifies the caller

Every attempt gets its own PaymentAttempt handle, so overlapping attempts
never share a completion callback.
"""

import asyncio
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from decimal import Decimal
from uuid import uuid4

import structlog
from pydantic import ValidationError

from checkout.confirmation import ConfirmationClient
from checkout.dropin import DropInController, DropInProvider, DropInResult, HostSurface
from checkout.models import ConfirmationPayload, DropInRequest, PaymentRequest
from checkout.outcomes import PaymentOutcome, PaymentResult
from checkout.return_url import return_url_scheme
from core.logging import BusinessEvents
from core.settings import Settings

log = structlog.get_logger(__name__)

CompletionCallback = Callable[[bool, PaymentResult], None]

ONE_TOUCH_UNSUPPORTED_ERROR = (
    "The operation couldn't be completed. "
    "Application does not support One Touch callback URL scheme"
)
ONE_TOUCH_DOCS_URL = "https://developers.braintreepayments.com/guides/paypal/client-side/ios/v4"


class PaymentConfigurationError(ValueError):
    pass


def _is_one_touch_unsupported(description: str) -> bool:
    normalised = description.replace("’", "'").casefold()
    return normalised == ONE_TOUCH_UNSUPPORTED_ERROR.casefold()


class PaymentAttempt:
    """Handle for a single in-flight payment.

    Resolves once with a PaymentResult. Callers can block on ``result()``,
    ``await attempt.wait()`` from asyncio code, or rely on the completion
    callback passed to ``make_payment``.
    """

    def __init__(self, request: PaymentRequest, on_complete: CompletionCallback | None = None):
        self.id = uuid4().hex
        self.request = request
        self._on_complete = on_complete
        self._future: Future = Future()
        self._lock = threading.Lock()
        self._claimed = False

    def done(self) -> bool:
        return self._future.done()

    def result(self, timeout: float | None = None) -> PaymentResult:
        return self._future.result(timeout=timeout)

    def add_done_callback(self, fn: Callable[["PaymentAttempt"], None]) -> None:
        self._future.add_done_callback(lambda _: fn(self))

    async def wait(self) -> PaymentResult:
        return await asyncio.wrap_future(self._future)

    def _claim(self) -> bool:
        """Reserve the single resolution slot; False if already taken."""
        with self._lock:
            if self._claimed:
                return False
            self._claimed = True
            return True

    def _take_callback(self) -> CompletionCallback | None:
        callback, self._on_complete = self._on_complete, None
        return callback

    def _finish(self, result: PaymentResult) -> None:
        self._future.set_result(result)


class PaymentCoordinator:
    def __init__(
        self,
        drop_in: DropInProvider,
        *,
        confirmation_client: ConfirmationClient | None = None,
        settings: Settings | None = None,
        executor: ThreadPoolExecutor | None = None,
    ):
        self.settings = settings or Settings()
        self.drop_in = drop_in
        self.confirmation_client = confirmation_client or ConfirmationClient(
            timeout=self.settings.CONFIRMATION_TIMEOUT_SECONDS
        )
        self.log_enabled = self.settings.PAYMENT_LOG_ENABLED

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.settings.CONFIRMATION_MAX_WORKERS,
            thread_name_prefix="payment-confirmation",
        )

    def make_payment(
        self,
        host: HostSurface,
        tokenization_key: str,
        amount: Decimal | float,
        currency_code: str,
        server_url: str,
        on_complete: CompletionCallback | None = None,
    ) -> PaymentAttempt:
        """
        Start a payment attempt.

        Args:
            host: Surface the drop-in UI is presented on
            tokenization_key: Client authorization for the drop-in SDK
            amount: Amount to charge
            currency_code: ISO currency code
            server_url: Merchant endpoint that confirms the nonce
            on_complete: Called once with ``(success, result)``

        Returns:
            The PaymentAttempt; control returns before the buyer has paid.

        Raises:
            PaymentConfigurationError: The server url is empty or not a valid url.
        """
        try:
            request = PaymentRequest(
                amount=amount,
                currency_code=currency_code,
                tokenization_key=tokenization_key,
                server_url=server_url,
            )
        except ValidationError as e:
            fields = {err["loc"][0] for err in e.errors() if err["loc"]}
            if "server_url" in fields:
                raise PaymentConfigurationError("Please pass a valid server payment url") from e
            raise PaymentConfigurationError(f"Invalid payment request: {e}") from e

        if self.settings.APP_BUNDLE_ID:
            self.drop_in.set_return_url_scheme(return_url_scheme(self.settings.APP_BUNDLE_ID))

        attempt = PaymentAttempt(request, on_complete)
        self._log(
            BusinessEvents.PAYMENT_ATTEMPT,
            attempt_id=attempt.id,
            amount=str(request.amount),
            currency=request.currency_code,
        )

        def handler(
            controller: DropInController,
            result: DropInResult | None,
            error: BaseException | None,
        ) -> None:
            try:
                self._handle_dropin_result(attempt, result, error)
            finally:
                controller.dismiss()

        controller = self.drop_in.create_controller(
            request.tokenization_key,
            DropInRequest.from_payment_request(request),
            handler,
        )
        host.present(controller)
        self._log(BusinessEvents.DROPIN_PRESENTED, attempt_id=attempt.id)
        return attempt

    def shutdown(self, wait: bool = True) -> None:
        """Release the confirmation executor if this coordinator created it."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def _handle_dropin_result(
        self,
        attempt: PaymentAttempt,
        result: DropInResult | None,
        error: BaseException | None,
    ) -> None:
        self._log(
            BusinessEvents.DROPIN_RESULT,
            attempt_id=attempt.id,
            has_error=error is not None,
            is_cancelled=bool(result and result.is_cancelled),
            has_nonce=bool(result and result.nonce),
        )
        if error is not None:
            description = str(error)
            if _is_one_touch_unsupported(description):
                self._log(
                    BusinessEvents.ONE_TOUCH_UNSUPPORTED,
                    attempt_id=attempt.id,
                    detail=f"{description} \n To know more visit {ONE_TOUCH_DOCS_URL}",
                )
            self._complete(attempt, PaymentResult.of(PaymentOutcome.unknown, description))
        elif result is not None and result.is_cancelled:
            self._complete(attempt, PaymentResult.of(PaymentOutcome.cancelled))
        elif result is not None and result.nonce:
            self._submit_confirmation(attempt, result.nonce)
        else:
            self._log(BusinessEvents.UNRECOGNISED_RESULT, attempt_id=attempt.id, result=repr(result))
            self._complete(attempt, PaymentResult.of(PaymentOutcome.unknown))

    def _submit_confirmation(self, attempt: PaymentAttempt, nonce: str) -> None:
        payload = ConfirmationPayload(nonce=nonce, amount=attempt.request.amount)
        self._log(
            BusinessEvents.CONFIRMATION_SENT,
            attempt_id=attempt.id,
            url=attempt.request.server_url,
        )
        try:
            future = self._executor.submit(
                self.confirmation_client.confirm, attempt.request.server_url, payload
            )
        except RuntimeError as e:
            # executor already shut down
            self._complete(attempt, PaymentResult.of(PaymentOutcome.unknown, str(e)))
            return
        future.add_done_callback(lambda f: self._on_confirmation_done(attempt, f))

    def _on_confirmation_done(self, attempt: PaymentAttempt, future: Future) -> None:
        try:
            result = future.result()
        except Exception as e:
            result = PaymentResult.of(PaymentOutcome.unknown, str(e))
        self._complete(attempt, result)

    def _complete(self, attempt: PaymentAttempt, result: PaymentResult) -> None:
        if not attempt._claim():
            self._log(
                BusinessEvents.DUPLICATE_RESOLUTION,
                attempt_id=attempt.id,
                code=result.code,
            )
            return

        self._log(
            BusinessEvents.PAYMENT_RESOLVED,
            attempt_id=attempt.id,
            code=result.code,
            message=result.message,
        )

        # Settle the future first so a callback may read its own attempt
        attempt._finish(result)

        callback = attempt._take_callback()
        if callback is None:
            return
        try:
            callback(result.success, result)
        except Exception as e:
            log.error(BusinessEvents.CALLBACK_FAILED, attempt_id=attempt.id, error=str(e))

    def _log(self, event: str, **fields) -> None:
        if self.log_enabled:
            log.info(event, **fields)
