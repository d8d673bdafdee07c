"""
Contacts API — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the failure modes of a CRUD request.
How:   Each exception carries a client-safe ``message`` and a ``context`` dict
       for server-side logs. Global handlers registered in ``main.py`` map each
       type to its HTTP status code and JSON error body.
Who:   Raised by validators' callers (services) and the database accessor.

Exception Hierarchy:
    ContactsApiError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── StorageError             → 500 Internal Server Error
    └── NotInitializedError      → 500 Internal Server Error (no database handle)
"""

from typing import Any, Dict, Optional


class ContactsApiError(Exception):
    """
    Base exception for all Contacts API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
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


class ValidationError(ContactsApiError):
    """
    Raised when client input fails validation.

    When:    Malformed document identifier, incomplete contact payload,
             empty user payload, body that is not a JSON object.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid ID format",
            "details": {"field": "id"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(ContactsApiError):
    """
    Raised when a well-formed identifier names no stored document.

    When:    find_one returned None, or replace/delete matched zero documents.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StorageError(ContactsApiError):
    """
    Raised when a MongoDB driver call fails.

    HTTP:    500 Internal Server Error

    The message sent to the client is always generic; the driver error type
    and the operation are kept in ``context`` for the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotInitializedError(ContactsApiError):
    """
    Raised when the database handle is requested before initialization.

    HTTP:    500 Internal Server Error

    Kept apart from StorageError so the log shows that the process never
    connected, rather than a failing query.
    """

    def __init__(
        self,
        message: str = "Database not connected. Call initialize() first.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
