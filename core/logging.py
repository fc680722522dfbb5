"""Structured logging for checkout, configured from Settings."""

import logging
import sys

import structlog
from structlog.types import EventDict

from core.settings import Settings

SERVICE_NAME = "dropin-checkout"


def add_checkout_context(logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag every entry with the service name unless the caller set one."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def get_log_level(settings: Settings | None = None) -> str:
    settings = settings or Settings()
    return settings.LOG_LEVEL.upper()


def get_log_renderer(settings: Settings | None = None):
    """JSON for tests and production, colored console output otherwise."""
    settings = settings or Settings()
    if settings.ENVIRONMENT == "development":
        return structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)
    return structlog.processors.JSONRenderer()


def configure_logging(settings: Settings | None = None):
    settings = settings or Settings()
    testing = settings.ENVIRONMENT == "test"

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            add_checkout_context,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.ExceptionPrettyPrinter(),
            get_log_renderer(settings),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Tests swap processors at runtime, so loggers must not be cached there
        cache_logger_on_first_use=not testing,
    )

    # stdout under test for easier capture, stderr otherwise
    handler = logging.StreamHandler(sys.stdout if testing else None)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(get_log_level(settings))


# Business Event Log Names
class BusinessEvents:
    """Standard names for business event logs"""

    PAYMENT_ATTEMPT = "payment.attempt"
    DROPIN_PRESENTED = "payment.dropin_presented"
    DROPIN_RESULT = "payment.dropin_result"
    ONE_TOUCH_UNSUPPORTED = "payment.one_touch_unsupported"
    UNRECOGNISED_RESULT = "payment.unrecognised_result"
    CONFIRMATION_SENT = "payment.confirmation_sent"
    PAYMENT_RESOLVED = "payment.resolved"
    DUPLICATE_RESOLUTION = "payment.duplicate_resolution"
    CALLBACK_FAILED = "payment.callback_failed"


# Configure logging when module is imported
configure_logging()
