"""
PostgrestClient - async entry point for building requests.

Example:
    >>> config = APIConfig.with_token('https://db.example.com', 'jwt')
    >>> async with PostgrestClient(config) as db:
    ...     users = await db.from_('users').select('id,name').eq('active', True)
"""
import logging
from typing import Optional

import aiohttp

from .core.api import APIConfig, AiohttpTransport, RequestBuilder
from .core.exceptions import ClientClosedError
from .core.logging import get_logger


class PostgrestClient:
    """
    Creates RequestBuilders bound to one server and one aiohttp session.

    Builders inherit the configured default headers (including the bearer
    token and schema profile) and share the client's connection pool.
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize client.

        Args:
            config: Client configuration (uses defaults if not provided)
            session: Existing aiohttp session; it is left open on close()
        """
        self._config = config or APIConfig.default()
        self._session = session
        self._owns_session = session is None
        self._transport = AiohttpTransport(session=session, config=self._config)
        self._closed = False
        self._logger = get_logger('pgrest.client')
        # Let the root logger decide once basicConfig has been called
        if not logging.getLogger().handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> 'PostgrestClient':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._closed:
            raise ClientClosedError("Client is closed")
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(**self._config.get_connector_kwargs())
            self._session = aiohttp.ClientSession(
                connector=connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
            self._transport.session = self._session
            self._logger.debug(f"Opened session for {self._config.base_url}")
        return self._session

    async def close(self):
        """Close client and release resources."""
        self._closed = True
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
            self._logger.debug("Session closed")
        self._session = None
        self._transport.session = None

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(self, method: str, path: str) -> RequestBuilder:
        """
        Start a request against the server.

        Args:
            method: HTTP method
            path: Path relative to base_url (a table or rpc/<function>)

        Returns:
            RequestBuilder carrying the default headers

        Raises:
            ClientClosedError: If the client was closed
        """
        if self._closed:
            raise ClientClosedError("Client is closed")
        builder = RequestBuilder(method.upper(), self._url(path), self._transport)
        for name, value in self._config.default_headers().items():
            builder.set_header(name, value)
        return builder

    def from_(self, table: str) -> RequestBuilder:
        """Start a read from a table or view."""
        return self.request('GET', table)

    def get(self, path: str) -> RequestBuilder:
        return self.request('GET', path)

    def delete(self, path: str) -> RequestBuilder:
        return self.request('DELETE', path)
