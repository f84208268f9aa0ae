"""
Common Value Objects

Value objects and input coercion used across the booking and swap domains:
- DateRange: Represents a half-open range of calendar dates
- parse_calendar_date: Coerces request input into a date
- bounded_amount: Coerces request input into a bounded Decimal
- coerce_uuid: Coerces a record identifier
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from uuid import UUID

from shared.domain.base import ValueObject
from shared.domain.exceptions import ValidationError

CENT = Decimal("0.01")

_ISO_DAY = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def overlaps(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """
    Half-open interval overlap: [a_start, a_end) and [b_start, b_end)

    Ranges that only touch at an endpoint do not overlap.
    """
    return a_start < b_end and a_end > b_start


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for booking periods and availability checks.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValidationError(
                f"Start date ({self.start_date}) must be before end date ({self.end_date})"
            )

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Examples:
            - DateRange(25, 28) overlaps with DateRange(27, 30) -> True
            - DateRange(25, 28) overlaps with DateRange(28, 31) -> False (adjacent)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")
        return overlaps(self.start_date, self.end_date, other.start_date, other.end_date)

    def contains(self, check_date: date) -> bool:
        """start_date is inclusive, end_date is exclusive"""
        return self.start_date <= check_date < self.end_date

    def __len__(self) -> int:
        """Number of days in this range"""
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"


def coerce_uuid(value) -> UUID | None:
    """Return ``value`` as a UUID, or None when it cannot name a record."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def parse_calendar_date(value, field: str) -> date:
    """
    Coerce a calendar date from a ``date`` or an ISO ``YYYY-MM-DD`` string.

    Datetimes are rejected: bookings are day-granular. Other ISO 8601
    spellings such as ``20250601`` or week dates are refused too.
    """
    if isinstance(value, datetime):
        raise ValidationError(f"{field} must be a calendar date, not a timestamp")
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _ISO_DAY.fullmatch(value.strip()):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"{field} must be a valid date (YYYY-MM-DD)")


def bounded_amount(value, field: str, *, limit: Decimal, allow_negative: bool = False) -> Decimal:
    """
    Coerce a finite Decimal whose magnitude does not exceed ``limit``.

    Amounts are stored in whole cents, so anything finer is refused and the
    result is quantized to two places.

    Booleans are refused even though they are ints.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount < 0 and not allow_negative:
        raise ValidationError(f"{field} cannot be negative")
    if abs(amount) > limit:
        raise ValidationError(f"{field} cannot exceed {limit:,} in magnitude")
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{field} cannot have more than 2 decimal places")
    return amount.quantize(CENT)
