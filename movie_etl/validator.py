"""
Sheet Shape Validation Rules

Checks that the detected header row and each data row line up with the
fixed movie column layout before anything is mapped positionally.
"""

import logging
from typing import Any, Optional, Sequence, Tuple
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class SchemaError(ValueError):
    """Raised when the sheet does not have the expected shape."""


class Validator(ABC):
    """Abstract base class for shape validators."""

    @abstractmethod
    def validate(self, value: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate a value.

        Returns:
            Tuple of (is_valid, error_message)
        """
        pass


class HeaderValidator(Validator):
    """Validates the detected header row against the expected headers."""

    def __init__(self, expected: Sequence[str]):
        self.expected = list(expected)

    def validate(self, value: Any) -> Tuple[bool, Optional[str]]:
        """
        Validate detected headers.

        Extra columns after the expected ones are allowed; surrounding
        whitespace in a header cell is ignored.

        Args:
            value: Header row as read from the sheet

        Returns:
            Tuple of (is_valid, error_message)
        """
        if value is None:
            return False, "Header row is missing"

        detected = [str(header).strip() for header in value]

        if len(detected) < len(self.expected):
            return False, (
                f"Expected {len(self.expected)} columns, found {len(detected)}: {detected}"
            )

        for idx, (found, wanted) in enumerate(zip(detected, self.expected), 1):
            if found != wanted:
                return False, f"Column {idx} is '{found}', expected '{wanted}'"

        return True, None


class RowShapeValidator(Validator):
    """Validates that a row carries a cell for every expected column."""

    def __init__(self, width: int):
        self.width = width

    def validate(self, value: Any) -> Tuple[bool, Optional[str]]:
        if len(value) < self.width:
            return False, f"Expected {self.width} cells, found {len(value)}"

        missing = [idx for idx in range(self.width) if value[idx] is None]
        if missing:
            return False, f"Missing cells at columns {[idx + 1 for idx in missing]}"

        return True, None
