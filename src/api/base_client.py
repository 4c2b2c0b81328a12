"""Base HTTP client with retry logic and error handling."""

from typing import Any, Dict, Optional

import httpx
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential,
    wait_none,
    retry_if_exception_type
)

from ..utils.config import get_config
from ..utils.exceptions import InventoryAPIError, ResourceNotFoundError
from ..utils.logger import get_api_logger

RETRYABLE_ERRORS = (httpx.TimeoutException, httpx.NetworkError)


class BaseClient:
    """JSON-over-HTTP client that retries transport failures and maps HTTP errors."""

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize base client.

        Args:
            base_url: Base URL for API requests
            headers: Optional default headers
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.config = get_config()
        self.logger = get_api_logger()

        api = self.config.api
        self.retrying = Retrying(
            stop=stop_after_attempt(api.max_retries),
            wait=wait_exponential(multiplier=api.retry_delay) if api.exponential_backoff else wait_none(),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            before_sleep=self._log_retry,
            reraise=True
        )

        self.client = httpx.Client(
            base_url=self.base_url,
            headers={
                "Content-Type": "application/json",
                "User-Agent": "Reliable-Inventory-Dashboard/1.0",
                **(headers or {})
            },
            timeout=api.timeout,
            follow_redirects=True,
            transport=transport
        )

    def _log_retry(self, retry_state):
        self.logger.warning(
            f"Attempt {retry_state.attempt_number} failed: {retry_state.outcome.exception()}. Retrying..."
        )

    def request(self, method: str, endpoint: str, **kwargs) -> Any:
        """
        Send a request and return the decoded JSON body.

        Timeouts and network errors are retried up to ``api.max_retries``
        attempts. Empty bodies (e.g. 204 No Content) decode to ``None``.

        Raises:
            ResourceNotFoundError: On HTTP 404
            InventoryAPIError: On any other non-2xx status, on a transport
                failure that outlasts the retries, or on a non-JSON body
        """
        try:
            response = self.retrying(self.client.request, method, endpoint, **kwargs)
        except httpx.HTTPError as e:
            self.logger.error(f"{method} {endpoint} failed: {str(e)}")
            raise InventoryAPIError(
                f"{method} {endpoint} failed: {str(e)}",
                details={"error": str(e)}
            )

        self.logger.debug(f"{method} {endpoint} -> {response.status_code}")

        if response.status_code == 404:
            raise ResourceNotFoundError(
                f"Resource not found: {endpoint}",
                details={"status_code": 404, "response": response.text}
            )

        if not response.is_success:
            self.logger.error(f"{method} {endpoint} returned HTTP {response.status_code}")
            raise InventoryAPIError(
                f"{method} {endpoint} failed (HTTP {response.status_code})",
                details={"status_code": response.status_code, "response": response.text}
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            raise InventoryAPIError(
                f"{method} {endpoint} returned a non-JSON body",
                details={"response": response.text}
            )

    def get(self, endpoint: str, **kwargs) -> Any:
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, **kwargs) -> Any:
        return self.request("POST", endpoint, **kwargs)

    def put(self, endpoint: str, **kwargs) -> Any:
        return self.request("PUT", endpoint, **kwargs)

    def patch(self, endpoint: str, **kwargs) -> Any:
        return self.request("PATCH", endpoint, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> Any:
        return self.request("DELETE", endpoint, **kwargs)

    def close(self):
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
