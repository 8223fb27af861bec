"""
Custom exceptions for PostgREST requests.

Transport failures (aiohttp.ClientError and friends) are never wrapped;
only conditions detected by pgrest itself are raised from here.
"""
from typing import Optional, Any


class PostgrestException(Exception):
    """Base exception for all pgrest errors."""
    
    def __init__(self, message: str, error_code: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            error_code: Numeric error code (if available)
        """
        self.error_code = error_code
        super().__init__(message)


class ResponseParseError(PostgrestException, ValueError):
    """Raised when a response body is not valid JSON."""
    
    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Any = None,
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status: HTTP status of the response (if known)
            body: Raw response body that failed to parse
        """
        self.status = status
        self.body = body
        super().__init__(message, error_code=status)


class UnknownFilterError(PostgrestException, ValueError):
    """Raised when a filter operator is not in the operator table."""
    
    def __init__(self, operator: str) -> None:
        self.operator = operator
        super().__init__(f"Unknown filter operator: {operator!r}")


class ClientClosedError(PostgrestException):
    """Raised when a closed client is asked for a new request."""
    pass
