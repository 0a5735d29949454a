"""
Configuration settings for the YeetFit payments backend.
Handles environment variables and application settings.

The Settings object is built once at process start and handed to the
routers and services through FastAPI dependencies. Service code never
reads os.environ directly.
"""
from typing import Annotated, Any, Dict, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "YeetFit Backend"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    # CORS
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    # Razorpay API credentials (the key secret doubles as the HMAC key)
    RAZORPAY_KEY_ID: Optional[str] = None
    RAZORPAY_KEY_SECRET: Optional[str] = None
    RAZORPAY_API_BASE: str = "https://api.razorpay.com"
    RAZORPAY_TIMEOUT_SECONDS: float = 10.0

    # Order rules
    ORDER_MIN_AMOUNT: int = 100  # paise
    ORDER_ALLOWED_CURRENCIES: Annotated[List[str], NoDecode] = ["INR"]
    RECEIPT_PREFIX: str = "rcpt"
    RECEIPT_MAX_LENGTH: int = 40

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("ALLOWED_ORIGINS", "ORDER_ALLOWED_CURRENCIES", mode="before")
    @classmethod
    def split_csv(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("RAZORPAY_KEY_ID", "RAZORPAY_KEY_SECRET", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def razorpay_configured(self) -> bool:
        return bool(self.RAZORPAY_KEY_ID and self.RAZORPAY_KEY_SECRET)

    def describe(self) -> Dict[str, Any]:
        """Non-sensitive summary of the configuration, safe to log."""
        return {
            "app": self.APP_NAME,
            "version": self.APP_VERSION,
            "environment": self.ENVIRONMENT,
            "port": self.PORT,
            "razorpay_api_base": self.RAZORPAY_API_BASE,
            "razorpay_timeout_seconds": self.RAZORPAY_TIMEOUT_SECONDS,
            "key_id_present": bool(self.RAZORPAY_KEY_ID),
            "key_secret_present": bool(self.RAZORPAY_KEY_SECRET),
            "allowed_currencies": list(self.ORDER_ALLOWED_CURRENCIES),
        }


# Create settings instance
settings = Settings()
