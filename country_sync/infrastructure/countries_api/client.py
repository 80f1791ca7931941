"""Async client for the external, read-only countries provider.

This module provides the External Source Adapter: a thin httpx client that
fetches the complete raw country listing, with retry on transient failures,
OpenTelemetry tracing and wholesale failure semantics (no partial results).
"""

import json
import logging
from typing import Any

import httpx
from opentelemetry import trace
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from country_sync.infrastructure.countries_api.config import countries_api_settings
from country_sync.infrastructure.countries_api.exceptions import (
    CountriesAPIConnectionError,
    CountriesAPIOperationError,
)

logger = logging.getLogger(__name__)

tracer = trace.get_tracer(__name__)


class CountriesAPIClient:
    """Async client for the external countries API.

    Example:
        ```python
        client = CountriesAPIClient("https://api.sampleapis.com/countries/countries")
        raw_countries = await client.fetch_all()
        await client.close()
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int | None = None,
        retry_attempts: int | None = None,
        retry_delay: float | None = None,
    ):
        """Initialize the countries API client.

        Args:
            base_url: Provider base URL. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
            retry_attempts: Attempts on connection failures. Defaults to settings.
            retry_delay: Exponential backoff multiplier in seconds. Defaults to settings.
        """
        self.base_url = (base_url or str(countries_api_settings.COUNTRIES_API_BASE_URL)).rstrip(
            "/"
        )
        self.timeout = timeout or countries_api_settings.COUNTRIES_API_TIMEOUT
        self.retry_attempts = retry_attempts or countries_api_settings.COUNTRIES_API_RETRY_ATTEMPTS
        self.retry_delay = (
            retry_delay
            if retry_delay is not None
            else countries_api_settings.COUNTRIES_API_RETRY_DELAY
        )
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def fetch_all(self, resource_path: str = "") -> list[dict[str, Any]]:
        """Fetch the full raw listing of a provider resource.

        Connection errors and timeouts are retried with exponential backoff;
        once attempts are exhausted the last CountriesAPIConnectionError is raised.

        Args:
            resource_path: Path relative to the base URL ("" for the base resource)

        Returns:
            Raw records, in the order returned by the provider

        Raises:
            CountriesAPIConnectionError: If the provider cannot be reached
            CountriesAPIOperationError: If the provider returns an error or a non-list body
        """
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(CountriesAPIConnectionError),
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_delay, min=0, max=10),
            reraise=True,
        ):
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                if attempt_number > 1:
                    logger.warning(
                        f"Retry attempt {attempt_number}/{self.retry_attempts} "
                        f"for countries API '{resource_path or '/'}'"
                    )
                return await self._fetch_once(resource_path)

        raise CountriesAPIConnectionError("Max retries exceeded")

    async def _fetch_once(self, resource_path: str) -> list[dict[str, Any]]:
        with tracer.start_as_current_span("countries_api_fetch_all") as span:
            span.set_attribute("countries_api.base_url", self.base_url)
            span.set_attribute("countries_api.resource_path", resource_path)

            try:
                client = await self._get_client()
                response = await client.get(resource_path)
            except httpx.ConnectError as e:
                span.record_exception(e)
                raise CountriesAPIConnectionError(
                    f"Failed to connect to countries API: {e}"
                ) from e
            except httpx.TimeoutException as e:
                span.record_exception(e)
                raise CountriesAPIConnectionError(
                    f"Countries API request timed out: {e}"
                ) from e

            span.set_attribute("countries_api.status_code", response.status_code)
            if response.status_code != 200:
                self._handle_error_response(response, span)

            try:
                payload = response.json()
            except json.JSONDecodeError as e:
                span.record_exception(e)
                raise CountriesAPIOperationError(
                    status_code=response.status_code,
                    message="Countries API returned a non-JSON body",
                    body=response.text,
                ) from e

            if not isinstance(payload, list):
                raise CountriesAPIOperationError(
                    status_code=response.status_code,
                    message="Countries API returned an unexpected payload (list expected)",
                    body=payload,
                )

            span.set_attribute("countries.count", len(payload))
            span.add_event("Countries listing fetched")
            return payload

    def _handle_error_response(self, response: httpx.Response, span: trace.Span) -> None:
        """Handle non-success HTTP responses.

        Raises:
            CountriesAPIOperationError: Always raised with error details
        """
        try:
            body = response.json()
        except json.JSONDecodeError:
            body = {"text": response.text}

        span.add_event("Countries API call failed", {"status_code": response.status_code})
        logger.error(f"Countries API responded with status {response.status_code}")

        raise CountriesAPIOperationError(
            status_code=response.status_code,
            message=f"Countries API call failed with status {response.status_code}",
            body=body,
        )

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client:
            await self._client.aclose()
            self._client = None
