"""
HTTP transport collaborator.

Builders never talk to the network themselves; they hand a URI, a method, a
header writer and an optional body to a ``Transport`` and decode whatever
``RawResponse`` comes back. ``HttpxTransport`` is the default implementation.
"""

import logging
from dataclasses import dataclass
from email.utils import formatdate
from typing import Callable, Dict, Optional, Protocol

import httpx

from .errors import TransportError
from .headers import CLIENT_REQUEST_ID, CONTENT_LENGTH, MS_DATE, VERSION
from .logging_config import clear_correlation_id, log_with_context, set_correlation_id

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2018-03-28"

HeaderWriter = Callable[[Dict[str, str]], None]


@dataclass(frozen=True)
class RawResponse:
    """Status, headers and body of a completed HTTP exchange."""

    status_code: int
    headers: httpx.Headers
    body: bytes


class Transport(Protocol):
    """Anything able to execute a single storage request."""

    async def perform_request(
        self,
        uri: str,
        method: str,
        header_writer: HeaderWriter,
        body: Optional[bytes] = None,
    ) -> RawResponse:
        ...

    async def aclose(self) -> None:
        ...


class HttpxTransport:
    """
    Transport backed by ``httpx.AsyncClient``.

    Writes ``x-ms-version`` and ``x-ms-date`` on every request, then lets the
    builder add its own headers. No retries are attempted.

    Example:
        transport = HttpxTransport(timeout=10.0)
        response = await transport.perform_request(uri, "GET", lambda headers: None)
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
    ):
        """
        Args:
            client: Pre-configured client (auth hooks, proxies, mock transports)
            api_version: Value of the x-ms-version header
            timeout: Request timeout in seconds, used when ``client`` is not given
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self.api_version = api_version

    async def perform_request(
        self,
        uri: str,
        method: str,
        header_writer: HeaderWriter,
        body: Optional[bytes] = None,
    ) -> RawResponse:
        headers: Dict[str, str] = {
            VERSION: self.api_version,
            MS_DATE: formatdate(usegmt=True),
        }
        header_writer(headers)
        if body is not None:
            headers.setdefault(CONTENT_LENGTH, str(len(body)))

        request_id = headers.get(CLIENT_REQUEST_ID)
        if request_id:
            set_correlation_id(request_id)
        try:
            logger.debug(f"{method} {uri}")
            try:
                response = await self._client.request(method, uri, headers=headers, content=body)
            except httpx.HTTPError as e:
                logger.error(f"{method} {uri} failed: {e}")
                raise TransportError(str(e), uri=uri) from e

            log_with_context(
                logger,
                logging.DEBUG,
                f"{method} {uri} -> {response.status_code}",
                status_code=response.status_code,
                request_id=response.headers.get("x-ms-request-id"),
            )
            return RawResponse(
                status_code=response.status_code,
                headers=response.headers,
                body=response.content,
            )
        finally:
            if request_id:
                clear_correlation_id()

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
