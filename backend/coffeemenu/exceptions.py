"""
Coffee Menu Backend — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the two failure classes the API has.
Why:   Global exception handlers (registered in main.py) turn these into JSON
       error responses with the right status code, so routes stay free of
       try/except blocks.
How:   Each exception class carries a message and optional context dict.

Exception Hierarchy:
    CoffeeMenuError (base)
    ├── UnauthorizedError   → 401 Unauthorized (missing/invalid token, bad login)
    └── StoreError          → 500 Internal Server Error (persistence failure)

Deleting a missing row is NOT an exception: the store reports zero changes.
"""

from typing import Any, Dict, Optional


class CoffeeMenuError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Error description returned in the `error` field of the response
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UnauthorizedError(CoffeeMenuError):
    """
    Raised when admin access is required but not proven.

    When:    Missing or mismatched bearer token on a gated route,
             or wrong username/password on login.
    HTTP:    401 Unauthorized, no side effect on the store.
    """

    def __init__(
        self,
        message: str = "Unauthorized. Admin access required.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreError(CoffeeMenuError):
    """
    Raised when the relational store rejects or fails an operation.

    When:    Constraint violation (e.g. item pointing at a missing category),
             locked or unreadable database file, connection loss.
    HTTP:    500 Internal Server Error.

    The driver's message is passed through verbatim; the operation is not
    retried and the surrounding transaction is rolled back.
    """

    def __init__(
        self,
        message: str = "A database error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def driver_message(exc: Exception) -> str:
    """The DBAPI's own message when there is one (e.g. 'FOREIGN KEY constraint failed')."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)
