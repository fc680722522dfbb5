"""Test configuration and fixtures."""

import os
import threading

# Must be set before core.logging is imported so loggers stay uncached
os.environ["ENVIRONMENT"] = "test"

import pytest

from checkout.coordinator import PaymentCoordinator
from core.settings import Settings

SERVER_URL = "https://merchant.example.com/payments/confirm"
BUNDLE_ID = "com.example.Shop"


class MockResponse:
    """Stand-in for requests.Response; only the body is consulted."""

    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content


class FakeController:
    """Drop-in controller double; ``finish`` plays the SDK's result handler."""

    def __init__(self, authorization, request, handler):
        self.authorization = authorization
        self.request = request
        self.handler = handler
        self.dismissed = 0

    def dismiss(self):
        self.dismissed += 1

    def finish(self, result=None, error=None):
        self.handler(self, result, error)


class FakeDropIn:
    def __init__(self):
        self.return_url_schemes = []
        self.controllers = []

    def set_return_url_scheme(self, scheme):
        self.return_url_schemes.append(scheme)

    def create_controller(self, authorization, request, handler):
        controller = FakeController(authorization, request, handler)
        self.controllers.append(controller)
        return controller

    @property
    def last(self):
        return self.controllers[-1]


class FakeHost:
    def __init__(self):
        self.presented = []

    def present(self, controller):
        self.presented.append(controller)


class CallbackRecorder:
    def __init__(self):
        self.calls = []
        self.called = threading.Event()

    def __call__(self, success, result):
        self.calls.append((success, result))
        self.called.set()

    def wait(self, timeout=5):
        """Block until the first callback; it runs after the attempt settles."""
        assert self.called.wait(timeout), "completion callback was not invoked"
        return self.calls


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment variables before each test."""
    original_env = dict(os.environ)

    os.environ.update(
        {
            "ENVIRONMENT": "test",
            "PAYMENT_LOG_ENABLED": "true",
        }
    )
    os.environ.pop("APP_BUNDLE_ID", None)

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def mock_settings():
    return Settings(
        APP_BUNDLE_ID=BUNDLE_ID,
        PAYMENT_LOG_ENABLED=True,
        CONFIRMATION_MAX_WORKERS=2,
        ENVIRONMENT="test",
    )


@pytest.fixture
def drop_in():
    return FakeDropIn()


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def recorder():
    return CallbackRecorder()


@pytest.fixture
def coordinator(drop_in, mock_settings):
    coordinator = PaymentCoordinator(drop_in, settings=mock_settings)
    yield coordinator
    coordinator.shutdown()
