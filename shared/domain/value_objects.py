"""
Common Value Objects

Value objects used across the booking contexts:
- DateRange: a stay from start_date (inclusive) to end_date (exclusive)
"""

from dataclasses import dataclass
from datetime import date, datetime

from shared.domain.base import ValueObject

ISO_DATE_FORMAT = '%Y-%m-%d'


class InvalidDateRange(ValueError):
    """Raised when a range does not cover at least one night."""


def parse_iso_date(value: str | None) -> date:
    """
    Parse a YYYY-MM-DD string into a date

    Raises ValueError for missing, non-string or malformed input.
    """
    if not isinstance(value, str):
        raise ValueError(f"Date must be a YYYY-MM-DD string, got {type(value).__name__}")
    if not value:
        raise ValueError("Date is required")
    return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for stays, restrictions and availability checks.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise InvalidDateRange(
                f"Start date ({self.start_date}) must be before end date ({self.end_date})"
            )

    @classmethod
    def from_strings(cls, start: str | None, end: str | None) -> 'DateRange':
        """Build a range from two YYYY-MM-DD strings."""
        return cls(parse_iso_date(start), parse_iso_date(end))

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        end_date is exclusive, so adjacent ranges don't overlap.

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> False (adjacent)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        # start1 < end2 AND start2 < end1
        return (self.start_date < other.end_date and
                other.start_date < self.end_date)

    def __len__(self) -> int:
        """Number of nights in this range"""
        return (self.end_date - self.start_date).days

    def isoformat(self) -> tuple[str, str]:
        return self.start_date.strftime(ISO_DATE_FORMAT), self.end_date.strftime(ISO_DATE_FORMAT)

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
