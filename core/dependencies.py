from checkout.coordinator import PaymentCoordinator
from checkout.dropin import DropInProvider
from core.settings import Settings

# Settings singleton
_settings = None

# Coordinator singleton
_coordinator = None


def get_settings() -> Settings:
    """Provide the checkout settings, loading them on first use."""
    if _settings is None:
        init_settings()
    return _settings


def init_settings(**overrides):
    """Initialize settings singleton."""
    global _settings
    _settings = Settings(**overrides)


def clear_settings():
    """Clear settings singleton."""
    global _settings
    _settings = None


def get_coordinator(drop_in: DropInProvider | None = None) -> PaymentCoordinator:
    """Shared coordinator for hosts that want a single app-wide instance.

    The drop-in provider is required the first time; later calls may omit it.
    """
    global _coordinator
    if _coordinator is None:
        assert drop_in is not None, "A drop-in provider is needed to create the coordinator."
        _coordinator = PaymentCoordinator(drop_in, settings=get_settings())
    return _coordinator


def clear_coordinator():
    """Shut down and clear the coordinator singleton."""
    global _coordinator
    if _coordinator is not None:
        _coordinator.shutdown(wait=False)
    _coordinator = None
