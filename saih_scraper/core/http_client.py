"""
Async HTTP client for the SAIH pages.

Built on httpx. Each call performs exactly one GET: there is no caching,
no retrying and no rate limiting, so a failure surfaces immediately.
"""

from typing import Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class HttpClient:
    """
    Async HTTP client returning page markup.

    Usage:
        async with HttpClient() as client:
            html = await client.get_text("https://www.saihduero.es/risr/EA013")
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        headers: Optional[dict] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent with every request
            headers: Extra default headers
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self.headers = {
            "Accept-Language": "es,en;q=0.9",
            "User-Agent": user_agent,
            **(headers or {}),
        }
        self.transport = transport

        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            headers=self.headers,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """
        Single GET request.

        Args:
            url: URL to fetch
            **kwargs: Additional httpx arguments

        Returns:
            httpx.Response object

        Raises:
            httpx.HTTPError: On transport errors and non-2xx responses
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        logger.debug("http_get", url=url)

        response = await self._client.get(url, **kwargs)
        response.raise_for_status()

        return response

    async def get_text(self, url: str, **kwargs) -> str:
        """GET request returning text content."""
        response = await self.get(url, **kwargs)
        return response.text
