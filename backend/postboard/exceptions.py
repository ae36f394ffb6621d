"""
PostBoard Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error cases of the Post API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the JSON error envelope with the matching HTTP status code.
Who:   Raised by the service layer; caught by global handlers.

Exception Hierarchy:
    PostBoardError (base)
    ├── ValidationError             → 400 Bad Request
    ├── NotFoundError               → 404 Not Found
    └── DatabaseError               → 500 Internal Server Error
        └── InvalidIdentifierError  → 500 Internal Server Error

Error envelope:
    {"success": false, "message": "...", "error": "..."}   (error is optional)
"""

from typing import Any, Dict, Optional


class PostBoardError(Exception):
    """
    Base exception for all PostBoard application errors.

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


class ValidationError(PostBoardError):
    """
    Raised when client input fails validation.

    When:    `title` or `content` missing/empty, malformed JSON body,
             unknown body fields, wrong field types.
    HTTP:    400 Bad Request

    Attributes:
        detail:  Optional description of the offending field, returned as
                 the envelope's `error` value.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.detail = detail


class NotFoundError(PostBoardError):
    """
    Raised when no record exists for the given identifier.

    When:    PUT or DELETE /api/posts/{id} with an id that matches nothing.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Post",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class DatabaseError(PostBoardError):
    """
    Raised when a database operation fails.

    When:    Connection lost, constraint violation, driver error, etc.
    HTTP:    500 Internal Server Error

    The message is a short description of the failed operation; the
    original exception type is kept in `context` and only logged.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidIdentifierError(DatabaseError):
    """
    Raised when a path identifier is not a valid post id (not a UUID).

    HTTP:    500 Internal Server Error, same as any other storage failure.
    """

    def __init__(
        self,
        resource_id: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource_id"] = resource_id
        super().__init__(message=f"Invalid post id '{resource_id}'", context=ctx)
        self.resource_id = resource_id
