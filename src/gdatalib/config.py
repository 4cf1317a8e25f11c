"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from ``GDATA_``-prefixed environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GDATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Serialization: escape term/href/rel/scheme/type attribute values as well
    escape_all_attributes: bool = False

    # Transport
    user_agent: str = "gdatalib/0.1"
    gdata_version: str = "2"
    request_timeout_seconds: float = Field(default=20.0, gt=0)

    # Logging
    log_level: str = "INFO"


settings = Settings()
