"""Transport to the Central Notification Service.

``TransportClient`` is the contract the rest of the SDK relies on;
``HttpTransportClient`` implements it with httpx and an OAuth2
client-credentials token exchange.
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from .config import CNSConfig
from .exceptions import AuthError, TransportError
from .models import AuthToken, Notification

logger = structlog.get_logger(__name__)

JSON_CONTENT_TYPE = "application/json;charset=UTF-8"
HAL_ACCEPT = "application/hal+json;version=1"


class TransportClient(ABC):
    """Abstract interface for delivering notifications."""

    @abstractmethod
    async def fetch_auth_token(self) -> AuthToken:
        """Obtain a bearer token. Raises AuthError on failure."""
        ...

    @abstractmethod
    async def submit(self, notification: Notification, token: AuthToken) -> None:
        """POST a validated notification. Raises TransportError on failure."""
        ...

    async def close(self) -> None:
        """Release any resources held by the transport."""


class HttpTransportClient(TransportClient):
    """
    HTTPS transport for the Central Notification Service.

    Example:
        ```python
        config = CNSConfig(client_id="my-app", client_secret="s3cret")
        async with HttpTransportClient(config) as transport:
            token = await transport.fetch_auth_token()
            await transport.submit(notification, token)
        ```
    """

    def __init__(self, config: CNSConfig) -> None:
        """
        Initialize the transport.

        Args:
            config: Client configuration
        """
        self.config = config
        self._client: httpx.AsyncClient | None = None
        logger.info("HttpTransportClient initialized", api_url=self.config.api_url)

    async def __aenter__(self) -> "HttpTransportClient":
        """Async context manager entry."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("HttpTransportClient closed")

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            error_data = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(error_data, dict):
            for key in ("error_description", "message", "detail", "error"):
                if error_data.get(key):
                    return str(error_data[key])
        return response.text

    async def fetch_auth_token(self) -> AuthToken:
        """
        Exchange the configured client credentials for an access token.

        Returns:
            AuthToken for the notifications endpoint

        Raises:
            AuthError: If the credentials are rejected or the token endpoint
                cannot be reached
        """
        try:
            client = self._get_client()
            response = await client.post(
                self.config.token_url,
                data={"grant_type": "client_credentials"},
                auth=(self.config.client_id, self.config.client_secret),
                headers={"Accept": "application/json"},
            )
        except httpx.RequestError as e:
            logger.error("Token request failed", error=str(e))
            raise AuthError(f"Token endpoint unavailable: {e}", status_code=None)

        if response.status_code != 200:
            message = self._error_message(response)
            logger.warning(
                "Token request rejected",
                status_code=response.status_code,
                client_id=self.config.client_id,
            )
            raise AuthError(message, status_code=response.status_code)

        try:
            token = AuthToken(**response.json())
        except (ValueError, TypeError) as e:
            # pydantic's ValidationError is a ValueError
            raise AuthError(f"Malformed token response: {e}", status_code=None)

        logger.info("Auth token fetched", expires_in=token.expires_in)
        return token

    async def submit(self, notification: Notification, token: AuthToken) -> None:
        """
        POST a notification to the notifications endpoint.

        Args:
            notification: Validated notification
            token: Token from fetch_auth_token

        Raises:
            TransportError: On a non-2xx response or network failure
        """
        headers = {
            "Authorization": f"Bearer {token.access_token}",
            "Content-Type": JSON_CONTENT_TYPE,
            "Accept": HAL_ACCEPT,
        }

        try:
            client = self._get_client()
            response = await client.post(
                self.config.api_url,
                headers=headers,
                content=notification.to_json().encode("utf-8"),
            )
        except httpx.RequestError as e:
            logger.error("Notification request failed", error=str(e))
            raise TransportError(f"Notification service unavailable: {e}")

        if not response.is_success:
            message = self._error_message(response)
            logger.error(
                "Notification rejected",
                status_code=response.status_code,
                message=message,
            )
            raise TransportError(message, status_code=response.status_code)

        logger.info(
            "Notification submitted",
            notification_type=notification.notification_type,
            recipient_count=len(notification.recipients),
            status_code=response.status_code,
        )
