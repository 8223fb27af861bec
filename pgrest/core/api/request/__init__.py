"""Request building, filter formatting and response handling."""
from .request_builder import RequestBuilder, PreparedRequest, ACCEPT_JSON, ACCEPT_SINGLE_OBJECT
from .response_handler import ResponseHandler, ContentRange, PagedList
from .filters import FILTER_OPERATORS, format_filter, format_value, to_query_value

__all__ = [
    'RequestBuilder',
    'PreparedRequest',
    'ACCEPT_JSON',
    'ACCEPT_SINGLE_OBJECT',
    'ResponseHandler',
    'ContentRange',
    'PagedList',
    'FILTER_OPERATORS',
    'format_filter',
    'format_value',
    'to_query_value',
]
