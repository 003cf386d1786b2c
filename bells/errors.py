"""Exceptions raised while parsing schedule data."""

from typing import Any


class FormatError(ValueError):
    """Raised when schedule data does not have the expected shape.

    Covers missing or invalid fields, unknown letters, unknown special
    names, malformed calendar dates and out-of-range clock values.
    """

    def __init__(self, message: str, value: Any = None, field: str = "") -> None:
        """Initialize the error.

        Args:
            message: Human-readable description of the problem.
            value: The offending value, if any.
            field: Name of the field the value came from, if any.
        """
        super().__init__(message)
        self.value = value
        self.field = field
