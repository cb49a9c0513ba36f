"""
Hiring Notifier Backend — Custom Exception Hierarchy
=====================================================

What:  Application-specific exceptions for the error scenarios of the service.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       structured JSON error responses with the matching HTTP status code.
Who:   Raised by the record store, services and transports; caught by the
       global handlers or, for DispatchError, by the notification dispatcher.

Exception Hierarchy:
    HiringNotifierError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    ├── StorageError      → 500 Internal Server Error
    └── DispatchError     → reported as a failed notification result;
                            500 only when it escapes the dispatcher
"""

from typing import Any, Dict, Optional


class HiringNotifierError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; only selected keys are returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HiringNotifierError):
    """
    Raised when client input fails a business rule.

    When:    Missing required fields, malformed email, unknown team,
             duplicate team name, status outside the allowed set.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Team \"Design\" not found. Please use one of the existing teams.",
            "details": {"field": "team", "availableTeams": ["Engineering", "Product"]}
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


class NotFoundError(HiringNotifierError):
    """
    Raised when a requested application or team does not exist.

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
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(HiringNotifierError):
    """
    Raised when a collection cannot be read or written.

    When:    Permission denied, disk full, malformed JSON in a collection
             that is about to be rewritten.
    HTTP:    500 Internal Server Error

    The response carries the message and the underlying cause text; file
    paths stay in the server log.
    """

    def __init__(
        self,
        message: str = "Storage operation failed",
        cause: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.cause = cause


class DispatchError(HiringNotifierError):
    """
    Raised by a mail transport when delivery fails.

    The notification dispatcher converts it into a failed NotificationResult,
    so a transport outage never fails an application submission. If the
    dispatch itself breaks (anything other than a delivery failure), the
    submission service raises DispatchError and the request ends with 500.
    """

    def __init__(
        self,
        message: str = "Notification delivery failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
