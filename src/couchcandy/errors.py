"""
couchcandy error types.
"""

from typing import Any, Optional


class CouchCandyError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TransportError(CouchCandyError):
    """Network or connection failure. Never retried."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("transport_error", message, details)


class DecodeError(CouchCandyError):
    """Response body is not valid JSON or does not match the expected shape."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("decode_error", message, details)


class InvalidDocumentError(CouchCandyError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("invalid_document", message, details)


class CouchDBError(CouchCandyError):
    """Error document returned by the server, e.g. {"error": "not_found", "reason": "missing"}."""

    def __init__(self, error: str, reason: str = ""):
        super().__init__(error, reason or error, {"error": error, "reason": reason})
        self.error = error
        self.reason = reason
