"""
MemoPad — Custom Exception Hierarchy
=====================================

What:  Application-specific exceptions for the few ways a request can fail.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       plain-text responses with the matching HTTP status code.
Who:   Raised by MemoStore and the route handlers; caught by global handlers.

Exception Hierarchy:
    MemoPadError (base)
    ├── ValidationError      → 400 Bad Request (missing/empty title or content)
    ├── MalformedBodyError   → 400 Bad Request (body is not the expected JSON)
    └── NotFoundError        → 404 Not Found (unknown memo id, route or file)

    Anything else that escapes a handler is answered with 500 and the raw
    exception message.

User-facing messages are Korean, matching the bundled front end.
"""

from typing import Any, Dict, Optional

MEMO_NOT_FOUND_MESSAGE = "메모를 찾을 수 없습니다"
REQUIRED_FIELDS_MESSAGE = "제목과 내용은 필수입니다"
MALFORMED_JSON_MESSAGE = "잘못된 JSON 형식입니다"
ROUTE_NOT_FOUND_MESSAGE = "NOT FOUND"


class MemoPadError(Exception):
    """
    Base exception for all MemoPad application errors.

    Attributes:
        message:  User-facing error description (returned as the response body)
        context:  Additional debug info (logged, not returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MemoPadError):
    """
    Raised when a required memo field is missing or blank.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = REQUIRED_FIELDS_MESSAGE,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MalformedBodyError(MemoPadError):
    """
    Raised when a request body cannot be read as a memo payload.

    When:    Invalid JSON, a JSON value that is not an object, or a non-string
             title/content.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = MALFORMED_JSON_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(MemoPadError):
    """
    Raised when a memo, static file or route does not exist.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "memo",
        resource_id: Optional[str] = None,
        message: str = MEMO_NOT_FOUND_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id
