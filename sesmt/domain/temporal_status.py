# SPDX-License-Identifier: Apache-2.0

"""
Temporal status of time-bounded compliance artifacts.

Every screen that shows whether an exam result, issued equipment item or
document is still valid delegates to ``compute_status``. The convention is
applied uniformly:

- ``expires_on < now``                       -> Expired
- ``now <= expires_on < now + window``       -> ExpiringSoon
- ``expires_on >= now + window``             -> Valid
- ``expires_on is None``                     -> NeverExpires

An item is therefore usable through its expiry day itself.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional

from ..models.enums import ComplianceStatus

DEFAULT_WARNING_WINDOW = timedelta(days=30)

CURRENT_STATUSES = (ComplianceStatus.VALID, ComplianceStatus.NEVER_EXPIRES)


def as_date(value: date) -> date:
    """Reduce a datetime reference instant to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def compute_status(
    expires_on: Optional[date],
    now: date,
    warning_window: timedelta = DEFAULT_WARNING_WINDOW
) -> ComplianceStatus:
    """
    Classify an expiry date relative to a reference date.

    Args:
        expires_on: Expiry date, or None for artifacts that never expire
        now: Reference date; a datetime is reduced to its date
        warning_window: Length of the "expiring soon" window

    Returns:
        One of the four ComplianceStatus values
    """
    if expires_on is None:
        return ComplianceStatus.NEVER_EXPIRES

    now = as_date(now)

    if expires_on < now:
        return ComplianceStatus.EXPIRED

    if expires_on < now + warning_window:
        return ComplianceStatus.EXPIRING_SOON

    return ComplianceStatus.VALID


def is_current(status: ComplianceStatus) -> bool:
    """Check if a status satisfies a requirement without follow-up."""
    return status in CURRENT_STATUSES


def add_months(start: date, months: int) -> date:
    """
    Add calendar months, clamping to the last day of the target month.

    Args:
        start: Starting date
        months: Number of months to add (may be negative)

    Returns:
        Shifted date
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def expiry_after(start: date, months: Optional[int]) -> Optional[date]:
    """Expiry date ``months`` after ``start``; None when no interval applies."""
    if months is None:
        return None
    return add_months(start, months)


def days_until(expires_on: Optional[date], now: date) -> Optional[int]:
    """Days left until expiry, negative once expired, None if it never expires."""
    if expires_on is None:
        return None
    return (expires_on - as_date(now)).days
