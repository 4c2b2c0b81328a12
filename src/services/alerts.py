"""Split stock records into expired and nearing-expiration buckets."""

from datetime import date, datetime
from typing import Iterable, Union

from .expiration import days_remaining
from ..models.alerts import AlertPartition
from ..models.inventory import InventoryRecord
from ..utils.exceptions import InvalidArgumentError


def partition_alerts(
    records: Iterable[InventoryRecord],
    window_days: int,
    now: Union[date, datetime, None] = None
) -> AlertPartition:
    """
    Partition records by days remaining until expiration.

    Args:
        records: Stock records in display order
        window_days: Lookahead horizon for "nearing expiration"
        now: Reference time; defaults to today

    Returns:
        ``AlertPartition`` whose buckets keep the input order. Records without
        an expiration date, or expiring after the window, are left out.

    Raises:
        InvalidArgumentError: If ``window_days`` is not a positive integer
        InvalidDateError: If a record carries an unparseable date
    """
    if isinstance(window_days, bool) or not isinstance(window_days, int) or window_days <= 0:
        raise InvalidArgumentError(
            "Alert window must be a positive number of days",
            details={"window_days": window_days}
        )

    partition = AlertPartition(window_days=window_days)

    for record in records:
        if record.expiration_date is None:
            continue

        days = days_remaining(record.expiration_date, now)
        if days <= 0:
            partition.expired.append(record)
        elif days <= window_days:
            partition.nearing.append(record)

    return partition
