"""Runtime settings for syspulse, read from SYSPULSE_* environment variables."""

from functools import lru_cache

from pydantic import Field, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Dashboard polling, in seconds
    poll_rate: float = Field(default=2.0, gt=0)
    history_size: int = Field(default=50, ge=1)
    with_specs: bool = True

    # None waits on external commands forever
    command_timeout: PositiveFloat | None = None

    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="SYSPULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
