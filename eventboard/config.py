"""Application configuration settings.

This module defines the ``Settings`` class using ``pydantic-settings`` to
load configuration from environment variables (and a ``.env`` file when one
is present). It centralises all runtime configuration for the application,
such as OfficeRnD credentials, cache lifetimes and the display timezone.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

ONE_DAY_IN_SECONDS = 60 * 60 * 24


class Settings(BaseSettings):
    """Configuration values loaded from environment variables.

    Environment variable names map to fields by alias. Only the OfficeRnD
    client credentials are required; sensible defaults are provided for
    everything else.
    """

    # OfficeRnD authentication
    officernd_client_id: str = Field(..., alias="OFFICERND_CLIENT_ID")
    officernd_client_secret: str = Field(..., alias="OFFICERND_CLIENT_SECRET")

    # OfficeRnD API
    officernd_organization: str = Field(
        default="thedock",
        alias="OFFICERND_ORGANIZATION",
        description="Organization slug used in API paths.",
    )
    officernd_api_base_url: str = Field(
        default="https://app.officernd.com/api/v1",
        alias="OFFICERND_API_BASE_URL",
    )
    officernd_identity_url: str = Field(
        default="https://identity.officernd.com/oauth/token",
        alias="OFFICERND_IDENTITY_URL",
    )
    request_timeout_seconds: float = Field(default=10.0, alias="REQUEST_TIMEOUT_SECONDS")

    # Caching
    reference_cache_seconds: int = Field(
        default=3 * ONE_DAY_IN_SECONDS,
        alias="REFERENCE_CACHE_SECONDS",
        description=(
            "How long floors, meeting rooms, teams and members are cached. "
            "Bookings are always fetched fresh."
        ),
    )
    refresh_seconds: int = Field(
        default=60,
        alias="REFRESH_SECONDS",
        description="Interval (in seconds) between board refreshes.",
    )

    # Display
    display_timezone: str = Field(
        default="UTC",
        alias="DISPLAY_TIMEZONE",
        description="IANA timezone used to decide what 'today' is and to format times.",
    )

    # Server
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    class Config:
        env_file = ".env"
        extra = "ignore"


# Instantiate settings at module import time. This allows other modules to
# import ``settings`` directly without repeatedly reading environment variables.
settings = Settings()
