"""
pgrest - Async fluent request builder for PostgREST.

Usage:
    >>> from pgrest import PostgrestClient, APIConfig
    >>> 
    >>> async with PostgrestClient(APIConfig(base_url="https://db.example.com")) as db:
    ...     rows = await db.from_("todos").select("id, task").eq("done", False).range(0, 9)
    ...     print(len(rows), "of", rows.full_length)
"""
import logging
from .client import PostgrestClient

from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RequestBuilder,
    PreparedRequest,
    ResponseHandler,
    ContentRange,
    PagedList,
    FILTER_OPERATORS,
    Transport,
    TransportResponse,
    AiohttpTransport,
)

from .core.exceptions import (
    PostgrestException,
    ResponseParseError,
    UnknownFilterError,
    ClientClosedError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for pgrest modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'pgrest',
        'pgrest.client',
        'pgrest.request',
        'pgrest.response',
        'pgrest.transport',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'PostgrestClient',
    'RequestBuilder',
    'PreparedRequest',
    'ResponseHandler',
    'ContentRange',
    'PagedList',
    'FILTER_OPERATORS',
    'Transport',
    'TransportResponse',
    'AiohttpTransport',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'PostgrestException',
    'ResponseParseError',
    'UnknownFilterError',
    'ClientClosedError',
    'setup_logging',
]
