"""
Document Store Gateway — Exception Hierarchy
==============================================

What:  Application-specific exceptions for the few ways a request can fail.
How:   Each exception carries a message, an HTTP status and an optional
       context dict. The handlers registered in main.py turn every
       GatewayError into the same JSON error body; context is logged
       server-side and never returned to the client.

Exception Hierarchy:
    GatewayError (base)
    ├── StoreConnectionError     → process exits (raised during startup only)
    ├── StoreError               → 500 Internal Server Error
    ├── InvalidIdentifierError   → 500 Internal Server Error
    └── MalformedBodyError       → 400 Bad Request

Store failures and malformed ids deliberately share one status and one body
shape: callers cannot tell a bad id from a store outage.
"""

from typing import Any, Dict, Optional

# Returned for both store failures and malformed ids.
GENERIC_STORE_MESSAGE = "A database error occurred. Please try again later."


class GatewayError(Exception):
    """
    Base exception for all gateway errors.

    Attributes:
        message:      User-facing error description (returned in the response)
        context:      Debug info (logged, NOT returned to the client)
        status_code:  HTTP status used by the global handler
        error_code:   Short machine-readable code for the response body
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class StoreConnectionError(GatewayError):
    """
    Raised when the initial connection to the document store fails.

    When:    Network unreachable, authentication rejected, malformed URI.
    Effect:  Startup aborts and the process exits with a non-zero status.
             There is no retry and no degraded mode.
    """

    def __init__(
        self,
        message: str = "Could not connect to the document store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(GatewayError):
    """
    Raised when a single store operation fails during a request.

    What:    Wraps any driver error (network blip, rejected write, invalid
             collection name) raised by find/insert/update/delete.
    HTTP:    500, generic message. The driver error is kept in `context`.
    """

    def __init__(
        self,
        operation: str,
        collection: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["operation"] = operation
        if collection is not None:
            ctx["collection"] = collection
        super().__init__(
            message=GENERIC_STORE_MESSAGE,
            context=ctx,
        )
        self.operation = operation
        self.collection = collection


class InvalidIdentifierError(GatewayError):
    """
    Raised when a path segment cannot be converted to a document id.

    HTTP:    500, the same response as StoreError. No distinct "bad request"
             status is returned for malformed ids.
    """

    def __init__(
        self,
        raw_id: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["id"] = raw_id
        super().__init__(
            message=GENERIC_STORE_MESSAGE,
            context=ctx,
        )
        self.raw_id = raw_id


class MalformedBodyError(GatewayError):
    """
    Raised when a JSON request body cannot be decoded.

    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "malformed_body"

    def __init__(
        self,
        message: str = "Request body is not valid JSON",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
