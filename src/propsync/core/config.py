"""Configuration management for property sync."""

import os
import logging
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from ..exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.hubapi.com"
DEFAULT_OBJECT_TYPE = "contacts"
DEFAULT_DELETE_DELAY = 1.0
DEFAULT_TIMEOUT = 30.0


class HubSpotConfig(BaseModel):
    """Settings the HubSpot client and workflows need, built once at startup."""
    api_key: str = Field(..., min_length=1, description="Private app token sent as a bearer credential")
    base_url: str = Field(DEFAULT_BASE_URL, description="Base URL for the HubSpot API")
    object_type: str = Field(DEFAULT_OBJECT_TYPE, min_length=1, description="Object type whose properties are managed")
    delete_delay: float = Field(DEFAULT_DELETE_DELAY, ge=0, description="Pause in seconds between property deletions")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Per-request timeout in seconds")


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for a propsync run.

    Per-item progress goes to INFO, request tracing to DEBUG and failed
    properties or groups to ERROR. Unknown level names fall back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def load_environment(env_file: str = '.env') -> None:
    """Load HUBSPOT_* and PROPSYNC_* settings from a dotenv file, if present.

    Variables already set in the process environment take precedence.
    """
    env_path = Path(env_file)
    if not env_path.exists():
        logging.debug(f"No .env file found at {env_path}")
        return
    load_dotenv(env_path)
    logging.info(f"Loaded environment from {env_path}")


def get_required_env(key: str) -> str:
    """Read a setting the run cannot start without, such as HUBSPOT_API_KEY.

    Raises:
        ConfigurationError: If the variable is unset or empty
    """
    value = os.getenv(key)
    if not value:
        raise ConfigurationError(f"{key} environment variable is not set")
    return value


def get_optional_env(key: str, default: str = "") -> str:
    """Read a setting that has a built-in default; values stay strings for HubSpotConfig to coerce."""
    return os.getenv(key, default)


def load_config() -> HubSpotConfig:
    """Build the HubSpot configuration from environment variables.

    Raises:
        ConfigurationError: If the API key is missing or a setting is invalid
    """
    api_key = get_required_env('HUBSPOT_API_KEY')
    try:
        return HubSpotConfig(
            api_key=api_key,
            base_url=get_optional_env('HUBSPOT_BASE_URL', DEFAULT_BASE_URL),
            object_type=get_optional_env('HUBSPOT_OBJECT_TYPE', DEFAULT_OBJECT_TYPE),
            delete_delay=get_optional_env('PROPSYNC_DELETE_DELAY', str(DEFAULT_DELETE_DELAY)),
            timeout=get_optional_env('PROPSYNC_TIMEOUT', str(DEFAULT_TIMEOUT)),
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
