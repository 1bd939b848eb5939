"""Domain exception hierarchy.

Imported by the engine, the ledger and the API layer alike, so it stays free of
framework imports.
"""


class PromptHistoryError(Exception):
    """Base exception for all version-control errors."""


class InvalidArgument(PromptHistoryError, ValueError):
    """A text argument is not a string, or a diff is malformed for the text."""


class NotFound(PromptHistoryError, LookupError):
    """A referenced document or version does not exist."""


class InvalidOperation(PromptHistoryError):
    """The operation would break a structural invariant of the ledger."""
