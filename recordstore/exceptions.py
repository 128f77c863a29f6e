"""
RecordStore — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the record API.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       `{"success": false, "error": ...}` envelopes with the right status code.
Who:   Raised by the record service; caught by the global handlers.

Exception Hierarchy:
    RecordStoreError (base)      → 500 Internal Server Error
    ├── NotFoundError            → 404 Not Found
    ├── PersistenceError         → 500 (generic message, cause logged)
    └── UnexpectedError          → 500 (message of the underlying error)
"""

from typing import Any, Dict, Optional


class RecordStoreError(Exception):
    """
    Base exception for all RecordStore application errors.

    Attributes:
        message:  User-facing error description (returned in the envelope)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(RecordStoreError):
    """
    Raised when a requested record does not exist in the collection.

    When:    PUT or DELETE /api/records/{id} with an id nobody stored.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class PersistenceError(RecordStoreError):
    """
    Raised when the store file could not be written.

    When:    Disk full, permission denied, data file path not writable.
    HTTP:    500 Internal Server Error

    The message names the failed operation only; the OS error is logged by
    the store and never reaches the client.
    """

    def __init__(
        self,
        message: str = "Records could not be saved",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnexpectedError(RecordStoreError):
    """
    Wraps any other failure raised while handling a record operation.

    HTTP:    500 Internal Server Error, with the original error's message.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
