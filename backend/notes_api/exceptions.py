"""
Notes API: Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the outcomes a statement can have
       other than "exactly one row".
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON responses with the matching HTTP status codes.
Who:   Raised by NoteService; caught by the handlers in main.py.

Exception Hierarchy:
    NotesAPIError (base)
    ├── RowCountError              → 404, body is the raw query result
    │   ├── NotFoundError          (statement returned no rows)
    │   └── UnexpectedRowCountError (statement returned several rows)
    └── DatabaseError              → 500 Internal Server Error

NotFoundError and UnexpectedRowCountError are different failures that
existing clients see identically: a 404 carrying the raw query result.
Keeping them apart lets logs and tests tell them apart.
"""

from typing import Any, Dict, Optional

from notes_api.schemas.note import QueryResult


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  User-facing error description
        context:  Additional debug info (logged but NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class RowCountError(NotesAPIError):
    """
    Raised when a statement did not return exactly one row.

    HTTP:    404, with `result` serialized as the response body.
    """

    def __init__(
        self,
        result: QueryResult,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["command"] = result.command
        ctx["row_count"] = result.row_count
        super().__init__(
            message=message or f"{result.command} returned {result.row_count} rows, expected 1",
            context=ctx,
        )
        self.result = result


class NotFoundError(RowCountError):
    """
    Raised when no row matched the statement.

    When:    GET, PATCH or DELETE on an id that was never assigned or was deleted.
    """

    def __init__(
        self,
        result: QueryResult,
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        message = "The requested note was not found"
        if resource_id is not None:
            ctx["resource_id"] = resource_id
            message = f"note with ID '{resource_id}' was not found"
        super().__init__(result=result, message=message, context=ctx)


class UnexpectedRowCountError(RowCountError):
    """
    Raised when a statement returned more than one row where one was expected.

    When:    Not reachable through the primary key under normal conditions;
             INSERT ... RETURNING or a keyed statement reporting several rows.
    """


class DatabaseError(NotesAPIError):
    """
    Raised when statement execution fails.

    When:    Connection lost mid-query, SQL error, constraint violation.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the driver's
    error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
