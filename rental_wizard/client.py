"""Async HTTP client for the listing-creation endpoint using httpx.

The client keeps a single httpx.AsyncClient for connection reuse. Use it as
an async context manager for proper cleanup, or call close() explicitly.

Example:
    async with HttpListingClient("https://edurent.example") as client:
        created = await client.create(state.to_payload())
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from rental_wizard.lib.errors import ListingSubmissionError

if TYPE_CHECKING:
    from rental_wizard.settings import WizardSettings

logger = logging.getLogger(__name__)

__all__ = ["HttpListingClient"]

DEFAULT_ENDPOINT = "/api/listings"


class HttpListingClient:
    """POSTs listing payloads as JSON and maps every failure to one error type.

    Args:
        base_url: Service root (e.g. "https://edurent.example")
        endpoint: Path of the create endpoint
        headers: Extra request headers
        timeout: Transport timeout in seconds
        transport: Optional httpx transport (e.g. httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        endpoint: str = DEFAULT_ENDPOINT,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.endpoint = "/" + endpoint.lstrip("/")
        self.headers = headers or {}
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(
        cls,
        settings: "WizardSettings",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "HttpListingClient":
        return cls(
            base_url=settings.api_base_url,
            endpoint=settings.listings_endpoint,
            headers=dict(settings.headers),
            timeout=settings.timeout,
            transport=transport,
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
                transport=self._transport,
            )
            logger.debug("Created httpx client for %s", self.base_url)
        return self._client

    async def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a listing.

        Returns:
            The decoded JSON body, or an empty dict for non-JSON answers

        Raises:
            ListingSubmissionError: On any non-2xx status or transport failure
        """
        client = self._get_client()
        logger.debug("POST %s", self.url)
        try:
            response = await client.post(self.endpoint, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ListingSubmissionError(
                f"Listing service answered {exc.response.status_code}",
                status_code=exc.response.status_code,
                url=self.url,
                cause=exc,
            ) from exc
        except httpx.HTTPError as exc:
            raise ListingSubmissionError(
                "Listing service unreachable",
                url=self.url,
                cause=exc,
            ) from exc

        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {"data": body}

    async def close(self) -> None:
        """Close the underlying HTTP client and release connections."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpListingClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
