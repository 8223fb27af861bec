"""Response handler for PostgREST responses."""
import re
from dataclasses import dataclass
from typing import Any, Optional

from ..transport import TransportResponse
from ...logging import get_logger

logger = get_logger('pgrest.response')

CONTENT_RANGE_PATTERN = re.compile(r'^(\d+)-(\d+)/(\d+)$', re.ASCII)


@dataclass(frozen=True)
class ContentRange:
    """Parsed `Content-Range: <start>-<end>/<total>` header."""
    start: int
    end: int
    total: int

    @classmethod
    def parse(cls, header: Optional[str]) -> Optional['ContentRange']:
        """Parse a header value; None when absent or malformed."""
        if not header:
            return None
        match = CONTENT_RANGE_PATTERN.fullmatch(header)
        if not match:
            logger.debug(f"Ignoring malformed Content-Range: {header!r}")
            return None
        start, end, total = (int(group, 10) for group in match.groups())
        return cls(start=start, end=end, total=total)


class PagedList(list):
    """
    A list of rows annotated with the server-reported total.

    Behaves and compares like a plain list; full_length holds the total
    from Content-Range so callers can paginate without a count request.
    """

    def __init__(self, rows, content_range: ContentRange):
        super().__init__(rows)
        self.content_range = content_range
        self.full_length = content_range.total

    def __repr__(self) -> str:
        return f"PagedList({list.__repr__(self)}, full_length={self.full_length})"


class ResponseHandler:
    """Handles PostgREST responses."""

    @staticmethod
    def annotate(body: Any, content_range: Optional[str]) -> Any:
        """
        Attach full_length to list bodies when Content-Range is well formed.

        Args:
            body: Parsed JSON body
            content_range: Raw Content-Range header value, if any

        Returns:
            A PagedList for annotated list bodies, otherwise body unchanged
        """
        if not isinstance(body, list):
            return body
        parsed = ContentRange.parse(content_range)
        if parsed is None:
            return body
        return PagedList(body, parsed)

    @staticmethod
    async def process_response(response: TransportResponse) -> Any:
        """Read Content-Range, parse the JSON body and annotate it."""
        content_range = response.headers.get('content-range')
        body = await response.json()
        return ResponseHandler.annotate(body, content_range)
