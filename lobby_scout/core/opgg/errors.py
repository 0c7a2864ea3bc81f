"""Custom error classes for the OP.GG MCP client."""

from typing import Optional, Dict, Any


class OpggAPIError(Exception):
    """Base exception for OP.GG API errors with status code tracking."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize OpggAPIError.

        Args:
            message: Error message
            status_code: HTTP status code when the failure came from an HTTP response
            response_data: Raw response data from the API
        """
        super().__init__(message)
        self.status_code: Optional[int] = status_code
        self.response_data: Dict[str, Any] = response_data or {}
        self.message: str = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code:
            return f"OP.GG API Error {self.status_code}: {self.message}"
        return f"OP.GG API Error: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "status_code": self.status_code,
            "response_data": self.response_data,
        }


class TransportFailure(OpggAPIError):
    """The remote call itself errored (network failure, HTTP error, JSON-RPC error)."""

    pass


class RequestTimeoutError(OpggAPIError):
    """No response arrived within the allotted time."""

    pass


class MalformedResponseError(OpggAPIError):
    """A response arrived but matched none of the known shapes."""

    pass


class PlayerNotFoundError(OpggAPIError):
    """Identity resolved to no profile after every lookup strategy was exhausted."""

    pass
