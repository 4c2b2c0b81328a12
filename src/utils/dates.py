"""Calendar date helpers."""

import re
from datetime import date, datetime
from typing import Optional, Union

from .exceptions import InvalidDateError

ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_calendar_date(value: Union[str, date, None]) -> Optional[date]:
    """
    Parse a backend ``YYYY-MM-DD`` value into a ``date``.

    ``None`` and empty strings mean "no date". A ``datetime`` is reduced to
    its calendar date.

    Raises:
        InvalidDateError: If the value is not a valid calendar date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(
            f"Unsupported date value: {value!r}",
            details={"value": value}
        )

    text = value.strip()
    # date.fromisoformat also takes compact forms like "20240701" on newer Pythons.
    if not ISO_DATE.fullmatch(text):
        raise InvalidDateError(
            f"Invalid calendar date: {value!r}",
            details={"value": value}
        )

    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidDateError(
            f"Invalid calendar date: {value!r}",
            details={"value": value}
        )


def to_calendar_date(value: Union[date, datetime, None]) -> date:
    """Return the calendar date of ``value``, or today when it is ``None``."""
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value
