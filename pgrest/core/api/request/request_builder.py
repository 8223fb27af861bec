"""
Request builder for PostgREST requests.

Accumulates method, path, headers and query state through chainable
calls, then serializes it into one request when finished.
"""
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generator, List, Mapping, Optional, Union
from urllib.parse import urlencode

from multidict import CIMultiDict

from .filters import format_filter, format_value, to_query_value
from .response_handler import ResponseHandler
from ..transport import AiohttpTransport, Transport
from ...logging import get_logger

logger = get_logger('pgrest.request')

ACCEPT_JSON = 'application/json'
ACCEPT_SINGLE_OBJECT = 'application/vnd.pgrst.object+json'

_WHITESPACE = re.compile(r'\s')


@dataclass(frozen=True)
class PreparedRequest:
    """A fully serialized request, ready for the transport."""
    method: str
    url: str
    headers: CIMultiDict


class RequestBuilder:
    """
    Builds and sends a single PostgREST request.

    Every configuration method returns the builder itself. Awaiting the
    builder (or calling end()) sends the request and returns the parsed
    JSON body; list bodies come back as PagedList when the server
    reported a total in Content-Range.

    Example:
        >>> rows = await (RequestBuilder('GET', 'https://db.example.com/users')
        ...     .select('id, name')
        ...     .gte('age', 18)
        ...     .order('name', ascending=True)
        ...     .range(0, 9))
        >>> rows.full_length
        42
    """

    def __init__(self, method: str, path: str, transport: Optional[Transport] = None):
        """
        Initialize request builder.

        Args:
            method: HTTP method of the request
            path: URL the query string is appended to
            transport: Transport used by end() (aiohttp if not provided)
        """
        self._method = method
        self._path = path
        self._transport = transport or AiohttpTransport()
        self.headers = CIMultiDict()
        self.query_parts: List[str] = []
        self.query_params: Dict[str, Any] = {}
        self.single_row = False

    @property
    def method(self) -> str:
        return self._method

    @property
    def path(self) -> str:
        return self._path

    def set_header(self, name: str, value: str) -> 'RequestBuilder':
        """Append a header; earlier values for the same name are kept."""
        self.headers.add(name, value)
        return self

    def query(self, params: Union[str, Mapping[str, Any]]) -> 'RequestBuilder':
        """
        Add query state.

        A string is kept verbatim as a fragment and never re-encoded. A
        mapping is merged into the structured parameters, later keys
        overwriting earlier ones; those are percent-encoded on send.
        """
        if isinstance(params, str):
            self.query_parts.append(params)
        else:
            self.query_params.update(params)
        return self

    def auth(self, token: str) -> 'RequestBuilder':
        """Set auth with a bearer token."""
        return self.set_header('Authorization', f"Bearer {token}")

    def match(self, criteria: Mapping[str, Any]) -> 'RequestBuilder':
        """Filter on equality for every column/value pair."""
        return self.query({
            column: f"eq.{format_value(value)}"
            for column, value in criteria.items()
        })

    def select(self, columns: Optional[str]) -> 'RequestBuilder':
        """Select columns; all whitespace is stripped from the list."""
        if columns:
            self.query({'select': _WHITESPACE.sub('', columns)})
        return self

    def order(
        self,
        column: str,
        ascending: bool = False,
        nulls_first: bool = False
    ) -> 'RequestBuilder':
        """
        Order the results by a column.

        Args:
            column: Column to order by
            ascending: True for ascending order; descending by default
            nulls_first: True to sort nulls before other values
        """
        direction = 'asc' if ascending else 'desc'
        nulls = 'nullsfirst' if nulls_first else 'nullslast'
        return self.query(f"order={column}.{direction}.{nulls}")

    def range(
        self,
        start: Optional[Union[int, str]] = None,
        end: Optional[Union[int, str]] = None
    ) -> 'RequestBuilder':
        """
        Request a range of items.

        A missing start means 0; a missing end leaves the range open so
        the rest of the collection is returned. Call at most once: the
        Range headers are appended, not replaced.
        """
        self.set_header('Range-Unit', 'items')
        self.set_header('Range', f"{start or 0}-{end or ''}")
        return self

    def single(self) -> 'RequestBuilder':
        """Ask for a single object instead of a collection."""
        self.single_row = True
        return self

    def filter(self, column: str, operator: str, value: Any) -> 'RequestBuilder':
        """
        Add a filter using any operator from the operator table.

        Raises:
            UnknownFilterError: If the operator is not supported
        """
        return self.query(format_filter(column, operator, value))

    def eq(self, column: str, value: Any) -> 'RequestBuilder':
        return self.filter(column, 'eq', value)

    def gt(self, column: str, value: Any) -> 'RequestBuilder':
        return self.filter(column, 'gt', value)

    def lt(self, column: str, value: Any) -> 'RequestBuilder':
        return self.filter(column, 'lt', value)

    def gte(self, column: str, value: Any) -> 'RequestBuilder':
        return self.filter(column, 'gte', value)

    def lte(self, column: str, value: Any) -> 'RequestBuilder':
        return self.filter(column, 'lte', value)

    def like(self, column: str, value: Any) -> 'RequestBuilder':
        return self.filter(column, 'like', value)

    def ilike(self, column: str, value: Any) -> 'RequestBuilder':
        return self.filter(column, 'ilike', value)

    def is_(self, column: str, value: Any) -> 'RequestBuilder':
        return self.filter(column, 'is', value)

    def in_(self, column: str, value: Any) -> 'RequestBuilder':
        return self.filter(column, 'in', value)

    def not_(self, column: str, value: Any) -> 'RequestBuilder':
        return self.filter(column, 'not', value)

    def build_url(self) -> str:
        """Builds request URL: fragments first, then encoded parameters."""
        url = self._path
        if self.query_parts:
            url += '?' + '&'.join(self.query_parts)
        if self.query_params:
            params = {
                key: value if isinstance(value, (list, tuple)) else to_query_value(value)
                for key, value in self.query_params.items()
            }
            url += ('&' if self.query_parts else '?') + urlencode(params, doseq=True)
        return url

    def build_headers(self) -> CIMultiDict:
        """Copy of the headers with the Accept header for this request."""
        headers = self.headers.copy()
        headers.add('Accept', ACCEPT_SINGLE_OBJECT if self.single_row else ACCEPT_JSON)
        return headers

    def prepare(self) -> PreparedRequest:
        """Serialize the current state. Does not modify the builder."""
        return PreparedRequest(
            method=self._method,
            url=self.build_url(),
            headers=self.build_headers(),
        )

    def end(self) -> Awaitable[Any]:
        """
        Send the request.

        The request is serialized immediately; the returned awaitable
        performs exactly one transport call when awaited.

        Returns:
            Awaitable resolving to the parsed body. Transport errors and
            ResponseParseError are raised from it unchanged.
        """
        prepared = self.prepare()
        logger.debug(f"{prepared.method} {prepared.url}")
        return self._send(prepared)

    async def _send(self, prepared: PreparedRequest) -> Any:
        response = await self._transport.fetch(
            prepared.url,
            method=prepared.method,
            headers=prepared.headers,
        )
        return await ResponseHandler.process_response(response)

    def __await__(self) -> Generator[Any, None, Any]:
        return self.end().__await__()

    def then(
        self,
        on_resolve: Optional[Callable[[Any], Any]] = None,
        on_reject: Optional[Callable[[BaseException], Any]] = None
    ) -> Awaitable[Any]:
        """
        Chain callbacks onto a fresh end() call.

        Callbacks may be plain functions or return awaitables. Without a
        reject handler errors propagate to whoever awaits the result.
        """
        return self._chain(self.end(), on_resolve, on_reject)

    def catch(self, on_reject: Callable[[BaseException], Any]) -> Awaitable[Any]:
        """Shortcut for then(None, on_reject)."""
        return self.then(None, on_reject)

    @staticmethod
    async def _chain(pending, on_resolve, on_reject) -> Any:
        try:
            result = await pending
        except Exception as e:
            if on_reject is None:
                raise
            outcome = on_reject(e)
        else:
            if on_resolve is None:
                return result
            outcome = on_resolve(result)
        if hasattr(outcome, '__await__'):
            outcome = await outcome
        return outcome

    def __repr__(self) -> str:
        return f"<RequestBuilder {self._method} {self.build_url()}>"
