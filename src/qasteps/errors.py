from __future__ import annotations


class StepParserError(Exception):
    """Base class for qasteps specific exceptions."""


class KeywordTableError(StepParserError):
    """Raised when a keyword table cannot be parsed into a valid schema."""


class StepSourceError(StepParserError):
    """Raised when step text cannot be read from its source."""
