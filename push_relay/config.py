from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration settings for the push relay function"""

    # Application settings
    service_name: str = "push-relay"
    log_level: str = "INFO"
    environment: str = "dev"

    # Expo push settings
    expo_push_url: str = "https://exp.host/--/api/v2/push/send"
    expo_access_token: Optional[str] = None
    notification_priority: str = "high"

    # HTTP client settings
    request_timeout_seconds: float = 10.0  # seconds

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True
    )

    @field_validator("request_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout_seconds must be greater than 0")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return value


# Create settings instance
settings = Settings()
