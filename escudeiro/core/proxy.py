"""
Reverse Proxy Client
====================

HTTP client that forwards /api/ requests to the configured backend.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import aiohttp

from escudeiro.config.logging import get_logger
from escudeiro.core.exceptions import ProxyError

logger = get_logger(__name__)

# Headers that apply to a single connection and must not be forwarded.
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailers",
        "transfer-encoding",
        "upgrade",
    }
)

# Recomputed by the client or the server on each side.
REQUEST_SKIP_HEADERS = HOP_BY_HOP_HEADERS | {"host", "content-length"}
RESPONSE_SKIP_HEADERS = HOP_BY_HOP_HEADERS | {"content-length", "content-encoding"}


def filter_headers(headers: Any, skip: frozenset) -> List[Tuple[str, str]]:
    """Drop the named headers, keeping repeated ones such as Set-Cookie."""
    return [(key, value) for key, value in headers.items() if key.lower() not in skip]


@dataclass
class ProxiedResponse:
    """Response received from the backend."""

    status: int
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b""


class ReverseProxyClient:
    """Client forwarding requests to a single backend host."""

    def __init__(self, target: str, timeout: float = 10.0) -> None:
        self.target = target.rstrip("/")
        self.timeout = timeout
        self.logger: Any = logger.bind(component="reverse_proxy", target=self.target)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout, auto_decompress=True)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def build_url(self, path: str) -> str:
        """Join the backend URL with the incoming request path."""
        return f"{self.target}/{path.lstrip('/')}"

    async def forward(
        self,
        method: str,
        path: str,
        query: Sequence[Tuple[str, str]],
        headers: Any,
        body: bytes,
        client_host: Optional[str] = None,
    ) -> ProxiedResponse:
        """
        Forward a request to the backend.

        Args:
            method: HTTP method
            path: Request path, including the /api/ prefix
            query: Query parameters as key-value pairs, repeats allowed
            headers: Incoming request headers
            body: Raw request body
            client_host: Address of the original client for X-Forwarded-For

        Returns:
            The backend's response

        Raises:
            ProxyError: If the backend cannot be reached or times out
        """
        url = self.build_url(path)
        outgoing: Dict[str, str] = {}
        for key, value in filter_headers(headers, REQUEST_SKIP_HEADERS):
            outgoing[key.lower()] = value
        if client_host:
            previous = outgoing.get("x-forwarded-for")
            outgoing["x-forwarded-for"] = f"{previous}, {client_host}" if previous else client_host

        self.logger.info("Forwarding request", method=method, url=url)

        try:
            session = await self._get_session()
            async with session.request(
                method,
                url,
                params=list(query),
                headers=outgoing,
                data=body or None,
                allow_redirects=False,
            ) as response:
                content = await response.read()
                return ProxiedResponse(
                    status=response.status,
                    headers=filter_headers(response.headers, RESPONSE_SKIP_HEADERS),
                    body=content,
                )
        except asyncio.TimeoutError as e:
            self.logger.error("Proxy request timed out", url=url, timeout=self.timeout)
            raise ProxyError(f"Backend timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            self.logger.error("Proxy request failed", url=url, error=str(e))
            raise ProxyError(f"Backend request failed: {e}") from e
