"""
HTTP transport.

Defines the fetch capability RequestBuilder depends on, plus the
aiohttp implementation used by default. Any object matching the
Transport protocol can be passed to a builder instead.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

import aiohttp
from multidict import CIMultiDict, CIMultiDictProxy

from .config import APIConfig
from ..exceptions import ResponseParseError
from ..logging import get_logger

logger = get_logger('pgrest.transport')


@runtime_checkable
class TransportResponse(Protocol):
    """Minimal response shape consumed by RequestBuilder."""

    status: int
    headers: Mapping[str, str]

    async def json(self) -> Any:
        """
        Parse the response body as JSON.

        Raises:
            ResponseParseError: If the body is not valid JSON
        """
        ...


@runtime_checkable
class Transport(Protocol):
    """
    Protocol for transport implementations.

    A transport takes a URL plus method and headers, performs the call and
    returns a TransportResponse. Failures at the network level are raised
    as-is.
    """

    async def fetch(
        self,
        url: str,
        *,
        method: str,
        headers: CIMultiDict,
    ) -> TransportResponse:
        """
        Perform a request.

        Args:
            url: Fully serialized request URL
            method: HTTP method
            headers: Ordered multi-map of request headers

        Returns:
            The response
        """
        ...


@dataclass
class BufferedResponse:
    """Response whose body was read while the connection was open."""
    status: int
    headers: CIMultiDictProxy
    body: bytes = b''
    url: Optional[str] = None

    async def json(self) -> Any:
        """Decode the buffered body as JSON."""
        try:
            return json.loads(self.body.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as e:
            raise ResponseParseError(
                f"Empty or invalid JSON response (HTTP {self.status})",
                status=self.status,
                body=self.body,
            ) from e


@dataclass
class AiohttpTransport:
    """
    Transport backed by aiohttp.

    When no session is supplied, each fetch opens and closes its own
    ClientSession built from the configuration. Pass a session to share
    a connection pool across requests; the transport never closes a
    session it did not create.

    Example:
        >>> transport = AiohttpTransport()
        >>> response = await transport.fetch(url, method='GET', headers=CIMultiDict())
        >>> await response.json()
    """
    session: Optional[aiohttp.ClientSession] = None
    config: APIConfig = field(default_factory=APIConfig.default)

    async def fetch(
        self,
        url: str,
        *,
        method: str,
        headers: CIMultiDict,
    ) -> BufferedResponse:
        """Send the request and buffer the response body."""
        if self.session is not None and not self.session.closed:
            return await self._send(self.session, url, method, headers)

        connector = aiohttp.TCPConnector(**self.config.get_connector_kwargs())
        async with aiohttp.ClientSession(
            connector=connector,
            **self.config.get_session_kwargs()
        ) as session:
            return await self._send(session, url, method, headers)

    async def _send(
        self,
        session: aiohttp.ClientSession,
        url: str,
        method: str,
        headers: CIMultiDict,
    ) -> BufferedResponse:
        proxy = self.config.proxy.to_aiohttp_proxy() if self.config.proxy else None
        async with session.request(
            method, url, headers=headers, proxy=proxy
        ) as resp:
            body = await resp.read()
            logger.debug(f"{method} {url} -> {resp.status} ({len(body)} bytes)")
            return BufferedResponse(
                status=resp.status,
                headers=resp.headers,
                body=body,
                url=str(resp.url),
            )
