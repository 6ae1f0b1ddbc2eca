"""Exceptions raised while turning a corpus extract into the canonical table."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


class NormalizationError(ValueError):
    """Base class for fatal data-quality or integration failures."""


class CorpusFormatError(NormalizationError):
    """Raised when a corpus export cannot be read into flat records."""


class SchemaMismatchError(NormalizationError):
    """Raised when expected source columns are absent from the raw table."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"Source table is missing expected column(s): {', '.join(self.missing)}")


class MalformedDateError(NormalizationError):
    """Raised when a date field does not parse as an ISO 8601 calendar date."""

    def __init__(self, row: int, value: object) -> None:
        self.row = row
        self.value = value
        super().__init__(f"Row {row}: cannot parse date {value!r}")


@dataclass(frozen=True)
class Violation:
    """A required field found empty on a given input row."""

    row: int
    field: str

    def __str__(self) -> str:
        return f"row {self.row}: {self.field}"


class ValidationError(NormalizationError):
    """Raised with every required-field violation found in a table."""

    def __init__(self, violations: Iterable[Violation]) -> None:
        self.violations = tuple(violations)
        listing = "; ".join(str(violation) for violation in self.violations)
        super().__init__(f"{len(self.violations)} required field(s) empty: {listing}")
