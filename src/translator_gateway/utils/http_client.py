"""
HTTP client utilities for Translator Gateway.
Provides an async HTTP client with proxy support and connection pooling.
"""

from typing import Dict, Optional, Any

import httpx
from httpx import AsyncClient, Timeout, Limits
import structlog

logger = structlog.get_logger(__name__)


class HTTPClient:
    """Async HTTP client for one-shot upstream calls."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
        proxy_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for all requests
            timeout: Request timeout in seconds
            proxy_url: Optional outbound proxy
            transport: Optional httpx transport, mainly for tests
        """
        self.base_url = base_url
        self.timeout = timeout
        self.proxy_url = proxy_url
        self.transport = transport

        self.client = self._create_client()
        self._default_headers: Dict[str, str] = {}

    def set_default_headers(self, headers: Dict[str, str]) -> None:
        """Set default headers for all requests."""
        self._default_headers.update(headers)

    def _create_client(self) -> AsyncClient:
        """Create HTTP client with configured settings."""
        client_kwargs: Dict[str, Any] = {}
        if self.base_url:
            client_kwargs["base_url"] = self.base_url
        if self.transport is not None:
            client_kwargs["transport"] = self.transport
        elif self.proxy_url:
            client_kwargs["proxy"] = self.proxy_url
            logger.info("Proxy configured", proxy_url=self.proxy_url)

        client = AsyncClient(
            **client_kwargs,
            timeout=Timeout(
                connect=5.0,
                read=self.timeout,
                write=self.timeout,
                pool=5.0,
            ),
            limits=Limits(
                max_connections=100,
                max_keepalive_connections=20,
                keepalive_expiry=30.0,
            ),
        )

        client.headers.update({
            "User-Agent": "TranslatorGateway-Python/1.0.0",
            "Accept": "application/json",
        })

        return client

    async def request(
        self,
        method: str,
        url: str,
        **kwargs
    ) -> httpx.Response:
        """
        Make a single HTTP request.

        Args:
            method: HTTP method
            url: URL to request
            **kwargs: Additional arguments for httpx

        Returns:
            HTTP response

        Raises:
            httpx.HTTPError: On transport failures and timeouts
        """
        headers = dict(self._default_headers)
        headers.update(kwargs.pop("headers", None) or {})

        logger.debug("HTTP request", method=method, url=url)

        response = await self.client.request(method, url, headers=headers, **kwargs)

        logger.debug(
            "HTTP request completed",
            method=method,
            url=url,
            status_code=response.status_code,
        )

        return response

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """Make GET request."""
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        """Make POST request."""
        return await self.request("POST", url, **kwargs)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self.client:
            await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()


def create_http_client(config: Any, transport: Optional[httpx.AsyncBaseTransport] = None) -> HTTPClient:
    """
    Create the HTTP client for the translator upstream.

    Args:
        config: Application configuration
        transport: Optional httpx transport override

    Returns:
        HTTPClient instance
    """
    return HTTPClient(
        base_url=config.endpoint,
        timeout=config.request_timeout,
        proxy_url=config.proxy_url,
        transport=transport,
    )
