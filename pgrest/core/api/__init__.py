"""PostgREST API module."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .transport import Transport, TransportResponse, AiohttpTransport, BufferedResponse
from .request import (
    RequestBuilder,
    PreparedRequest,
    ResponseHandler,
    ContentRange,
    PagedList,
    FILTER_OPERATORS,
)

__all__ = [
    # Request building
    'RequestBuilder',
    'PreparedRequest',
    'ResponseHandler',
    'ContentRange',
    'PagedList',
    'FILTER_OPERATORS',
    
    # Transport
    'Transport',
    'TransportResponse',
    'AiohttpTransport',
    'BufferedResponse',
    
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
]
