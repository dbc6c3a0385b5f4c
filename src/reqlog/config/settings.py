from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase


class Settings(BaseSettings):
    """
    Logging settings loaded from environment (prefix `REQLOG_`).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"
    SERVICE_NAME: str | None = None

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/reqlog")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    LOG_USE_QUEUE: bool = False
    LOG_QUEUE_MAX_SIZE: int = 0  # 0 means unbounded
    LOG_QUEUE_BLOCKING: bool = False

    # Request logging
    REQUEST_LOGGER_NAME: str = "reqlog.requests"
    REQUEST_LOG_LEVEL: str = "info"

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_LEVEL environment variable value to uppercase.

        The stdlib logging module expects level names in uppercase
        ("DEBUG", "INFO"), while people tend to write `log_level=debug` in .env files.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", "REQUEST_LOG_LEVEL", mode="before")
    def normalize_lowercase(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        env_prefix="REQLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() is fine. Tests call get_settings.cache_clear() after patching env.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
