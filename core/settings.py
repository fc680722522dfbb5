from typing import Literal

from dotenv import load_dotenv
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

# Load .env file automatically
load_dotenv()


class Settings(BaseSettings):
    """Checkout settings loaded from environment variables."""

    # Host app bundle id, used for the app-switch return URL scheme
    APP_BUNDLE_ID: str | None = None

    # Payment logging
    PAYMENT_LOG_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"

    # Merchant server confirmation
    CONFIRMATION_TIMEOUT_SECONDS: float | None = None
    CONFIRMATION_MAX_WORKERS: int = 4

    ENVIRONMENT: Literal["development", "test", "production"] = "development"

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")
