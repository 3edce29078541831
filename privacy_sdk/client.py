"""Privacy API client implementation."""

from dataclasses import replace
from typing import Any

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import PrivacyConfig
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    PermissionDeniedError,
    PrivacySDKError,
    RateLimitError,
    ResourceNotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from .models import BalanceResponse, RemoteResult

logger = structlog.get_logger(__name__)


class PrivacyClient:
    """
    Async client for the remote privacy service.

    ``invoke`` is the one boundary the rest of the SDK talks through: it
    forwards a payload to an endpoint and reports success or failure as a
    ``RemoteResult`` instead of raising. ``request`` is the raising variant
    used for account endpoints.

    Example:
        ```python
        from privacy_sdk import PrivacyClient, PrivacyConfig

        async with PrivacyClient(PrivacyConfig(api_key="key")) as client:
            result = await client.invoke("/encrypt", {"data": "secret", "password": "pw"})
        ```
    """

    def __init__(self, config: PrivacyConfig | None = None) -> None:
        """
        Initialize the client.

        Args:
            config: Client configuration. If None, uses default config.

        Raises:
            ConfigurationError: If no API key is configured
        """
        self.config = config or PrivacyConfig()
        if not self.config.api_key:
            raise ConfigurationError("API key is required")
        self._client: httpx.AsyncClient | None = None
        logger.info("PrivacyClient initialized", base_url=self.config.base_url)

    async def __aenter__(self) -> "PrivacyClient":
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        return self._client

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-API-Key": self.config.api_key or "",
        }

    def _handle_error(self, response: httpx.Response) -> None:
        """
        Handle HTTP error responses.

        Raises:
            ValidationError: For 400/422 responses
            AuthenticationError: For 401 responses
            PermissionDeniedError: For 403 responses
            ResourceNotFoundError: For 404 responses
            RateLimitError: For 429 responses
            ServiceUnavailableError: For 503 responses
            PrivacySDKError: For other errors
        """
        status_code = response.status_code

        try:
            error_data = response.json()
            message = error_data.get("error") or error_data.get("detail") or response.text
        except Exception:
            message = response.text

        message = f"API request failed: {message}"

        if status_code in (400, 422):
            raise ValidationError(message)
        elif status_code == 401:
            raise AuthenticationError(message)
        elif status_code == 403:
            raise PermissionDeniedError(message)
        elif status_code == 404:
            raise ResourceNotFoundError(message)
        elif status_code == 429:
            raise RateLimitError(message)
        elif status_code == 503:
            raise ServiceUnavailableError(message)
        else:
            raise PrivacySDKError(message, status_code=status_code)

    async def _send(self, method: str, endpoint: str, json: Any = None) -> httpx.Response:
        client = self._get_client()
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max(self.config.max_retries, 1)),
            wait=wait_exponential(
                multiplier=1,
                min=self.config.retry_min_wait,
                max=self.config.retry_max_wait,
            ),
            retry=retry_if_exception_type(httpx.RequestError),
            reraise=True,
        ):
            with attempt:
                return await client.request(
                    method, endpoint, json=json, headers=self._get_headers()
                )
        raise PrivacySDKError("Request was not attempted", code="NETWORK_ERROR")

    async def request(self, method: str, endpoint: str, json: Any = None) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            PrivacySDKError: For HTTP error statuses (mapped subclasses) and
                network failures (``code="NETWORK_ERROR"``)
        """
        try:
            response = await self._send(method, endpoint, json=json)
        except httpx.RequestError as e:
            logger.error("Privacy API unreachable", endpoint=endpoint, error=str(e))
            raise PrivacySDKError(f"Network error: {e}", code="NETWORK_ERROR") from e

        if response.status_code >= 400:
            self._handle_error(response)
        return response.json()

    async def invoke(self, endpoint: str, payload: dict[str, Any]) -> RemoteResult:
        """Forward ``payload`` to ``endpoint``; never raises for remote failures."""
        try:
            data = await self.request("POST", endpoint, json=payload)
        except PrivacySDKError as e:
            logger.warning("Remote operation failed", endpoint=endpoint, error=e.message)
            return RemoteResult(success=False, error=e.message, status_code=e.status_code)
        return RemoteResult(success=True, data=data)

    async def get_balance(self) -> BalanceResponse:
        data = await self.request("GET", f"/billing/balance/{self.config.api_key}")
        return BalanceResponse(**data)

    async def get_usage(self) -> dict[str, Any]:
        return await self.request("GET", f"/billing/usage/{self.config.api_key}")

    async def health_check(self) -> dict[str, Any]:
        return await self.request("GET", "/health")

    async def update_config(self, **changes: Any) -> None:
        """Replace config fields; the HTTP client is rebuilt on next use."""
        self.config = replace(self.config, **changes)
        await self.close()
