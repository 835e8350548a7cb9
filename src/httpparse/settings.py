"""Library settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from httpparse.constants import DEFAULT_READ_LIMIT_BYTES


class HttpParseSettings(BaseSettings):
    """Environment configuration for default read limits."""

    model_config = SettingsConfigDict(env_prefix="HTTPPARSE_", case_sensitive=False)

    read_limit_bytes: int = Field(
        default=DEFAULT_READ_LIMIT_BYTES,
        gt=0,
        description="Default byte cap for raw body reads",
    )


def get_settings() -> HttpParseSettings:
    """Get a settings instance."""
    return HttpParseSettings()
