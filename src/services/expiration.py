"""Days-until-expiration arithmetic and severity classification."""

from datetime import date, datetime
from typing import Optional, Union

from ..models.alerts import Severity
from ..models.inventory import InventoryRecord
from ..utils.dates import parse_calendar_date, to_calendar_date
from ..utils.exceptions import InvalidDateError

CRITICAL_DAYS = 7
NEAR_TERM_DAYS = 30


def days_remaining(
    expiration_date: Union[str, date],
    reference_now: Union[date, datetime, None] = None
) -> int:
    """
    Whole calendar days from ``reference_now`` to ``expiration_date``.

    Positive means the date is in the future; zero or negative means the
    stock expired today or earlier. The time of day of ``reference_now``
    is ignored.

    Raises:
        InvalidDateError: If ``expiration_date`` is missing or malformed.
    """
    expires_on = parse_calendar_date(expiration_date)
    if expires_on is None:
        raise InvalidDateError("Expiration date is required", details={"value": expiration_date})

    return (expires_on - to_calendar_date(reference_now)).days


def severity_of(days: int) -> Severity:
    """Map days remaining to a severity bucket."""
    if days <= 0:
        return Severity.EXPIRED
    if days <= CRITICAL_DAYS:
        return Severity.CRITICAL
    if days <= NEAR_TERM_DAYS:
        return Severity.NEAR_TERM
    return Severity.NORMAL


def classify(
    record: InventoryRecord,
    now: Union[date, datetime, None] = None
) -> Optional[Severity]:
    """Severity of a stock record, or ``None`` when it has no expiration date."""
    if record.expiration_date is None:
        return None
    return severity_of(days_remaining(record.expiration_date, now))


def status_text(days: int) -> str:
    if days <= 0:
        return "EXPIRED"
    return f"{days} days left"
