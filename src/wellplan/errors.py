"""Exception hierarchy shared by the plan engine, the store and the CLI."""

from __future__ import annotations

from typing import Optional


class WellplanError(Exception):
    """Base exception for wellplan errors."""

    pass


class ValidationError(WellplanError):
    """Raised when a questionnaire field is missing or cannot be parsed.

    Attributes:
        field: Name of the offending field (snake_case, as in the input)
    """

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Invalid value for '{field}'")


class UnavailableInputError(WellplanError):
    """Raised when no questionnaire or body-composition data is present.

    Compute functions return ``None`` instead of raising this; loaders
    raise it so callers can hide the affected plan sections.
    """

    pass


class PersistenceError(WellplanError):
    """Raised when the profile store cannot read or write plan data."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
