"""Configuration for CNS SDK."""

import math
from dataclasses import dataclass, field

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError

DEFAULT_TOKEN_URL = "https://notifications.iu.edu/oauth/token"
DEFAULT_API_URL = "https://notifications.iu.edu/rest-api/secure/notifications"


class CNSSettings(BaseSettings):
    """CNS client settings read from the environment (``CNS_*`` variables)."""

    client_id: str = ""
    client_secret: str = Field(default="", repr=False)
    token_url: str = DEFAULT_TOKEN_URL
    api_url: str = DEFAULT_API_URL
    timeout: float = Field(default=5.0, gt=0, allow_inf_nan=False)
    verify_ssl: bool = True

    model_config = SettingsConfigDict(env_prefix="CNS_")


@dataclass
class CNSConfig:
    """
    Configuration for the CNS transport client.

    Attributes:
        client_id: OAuth2 client ID issued by the Central Notification Service
        client_secret: OAuth2 client secret
        token_url: OAuth2 token endpoint
        api_url: Notifications endpoint
        timeout: Request timeout in seconds (default: 5.0)
        verify_ssl: Whether to verify SSL certificates (default: True)

    Example:
        ```python
        config = CNSConfig(
            client_id="my-app",
            client_secret="s3cret",
            timeout=10.0,
        )
        ```
    """

    client_id: str
    client_secret: str = field(repr=False)
    token_url: str = DEFAULT_TOKEN_URL
    api_url: str = DEFAULT_API_URL
    timeout: float = 5.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.client_id:
            raise ConfigError("client_id is required")

        if not self.client_secret:
            raise ConfigError("client_secret is required")

        self.token_url = self.token_url.rstrip("/")
        self.api_url = self.api_url.rstrip("/")

        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigError("timeout must be greater than 0")

    @classmethod
    def from_env(cls, prefix: str = "CNS_") -> "CNSConfig":
        """
        Build a configuration from environment variables.

        Reads ``{prefix}CLIENT_ID`` and ``{prefix}CLIENT_SECRET`` plus the
        optional ``TOKEN_URL``, ``API_URL``, ``TIMEOUT`` and ``VERIFY_SSL``.

        Raises:
            ConfigError: If a variable is missing or cannot be parsed
        """
        try:
            settings = CNSSettings(_env_prefix=prefix)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid {prefix}* environment configuration: {e}")

        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            token_url=settings.token_url,
            api_url=settings.api_url,
            timeout=settings.timeout,
            verify_ssl=settings.verify_ssl,
        )
