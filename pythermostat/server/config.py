"""
Configuration Management for pyThermostat Server

All server settings come from environment variables (or a .env file in the
working directory) and are loaded once into a pydantic Settings object.

Environment Variables:

    Server Settings:
        TS_BIND_ADDRESS      - Server bind address (default: "0.0.0.0")
        TS_PORT              - Server port (default: 8080)
        TS_DEBUG             - Enable debug logging "yes"/"no" (default: "no")
        TS_API_PREFIX        - Prefix of the thermostat routes (default: "/v1")
        CORS_ORIGINS         - JSON list of allowed origins (default: ["*"])

    Home Settings:
        TS_SEED              - Start with the two default thermostats (default: "yes")
        TS_MIN_SET_POINT     - Lowest accepted set point in F (default: 30)
        TS_MAX_SET_POINT     - Highest accepted set point in F (default: 100)

Examples:

    # Listen on localhost only, verbose logging
    TS_BIND_ADDRESS=127.0.0.1
    TS_PORT=9000
    TS_DEBUG=yes

    # Start with an empty home
    TS_SEED=no

Accessing Configuration:

    from pythermostat.server.config import settings

    port = settings.server_port
    if settings.debug:
        pass
"""
import logging
from typing import List

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pythermostat import __version__

logger = logging.getLogger(__name__)

# Server version
SERVER_VERSION = __version__


class Settings(BaseSettings):
    """Application settings loaded from the environment."""

    # Server configuration
    server_host: str = Field(default="0.0.0.0", alias="TS_BIND_ADDRESS")
    server_port: int = Field(default=8080, alias="TS_PORT")
    debug: bool = Field(default=False, alias="TS_DEBUG")
    api_prefix: str = Field(default="/v1", alias="TS_API_PREFIX")

    # Home configuration
    seed: bool = Field(default=True, alias="TS_SEED")
    min_set_point: int = Field(default=30, alias="TS_MIN_SET_POINT")
    max_set_point: int = Field(default=100, alias="TS_MAX_SET_POINT")

    # CORS configuration
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def _check_set_point_range(self):
        if self.min_set_point > self.max_set_point:
            raise ValueError(
                f"TS_MIN_SET_POINT ({self.min_set_point}) is above TS_MAX_SET_POINT ({self.max_set_point})"
            )
        return self


# Global settings instance
settings = Settings()
