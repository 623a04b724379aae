"""
Utility functions for display labels derived from timestamps and counts.

These labels are cosmetic: when a value cannot be computed they fall back to a
neutral placeholder instead of failing the request that asked for them.
"""
from datetime import datetime
from typing import Optional
import logging
import math

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24


def days_left_label(week_end: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Describe how many days remain until a prompt's week ends."""
    try:
        now = now or datetime.utcnow()
        diff_days = math.ceil((week_end - now).total_seconds() / SECONDS_PER_DAY)
    except (TypeError, ValueError, OverflowError) as e:
        logger.debug(f"Could not compute days left for {week_end!r}: {e}")
        return "Active"

    if diff_days < 0:
        return "Expired"
    if diff_days == 0:
        return "Last day"
    if diff_days == 1:
        return "1 day left"
    return f"{diff_days} days left"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def time_ago_label(created_at: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Describe the distance from ``created_at`` to now, e.g. "5 minutes ago".
    Returns "Recently" when the timestamp is missing or unusable.
    """
    try:
        now = now or datetime.utcnow()
        seconds = (now - created_at).total_seconds()
    except (TypeError, ValueError, OverflowError) as e:
        logger.debug(f"Could not compute time ago for {created_at!r}: {e}")
        return "Recently"

    if seconds < 0:
        return "Recently"

    minutes = round(seconds / 60)
    if minutes < 1:
        return "less than a minute ago"
    if minutes < 45:
        return f"{_plural(minutes, 'minute')} ago"

    hours = round(minutes / 60)
    if hours < 24:
        return f"about {_plural(hours, 'hour')} ago"

    days = round(hours / 24)
    if days < 30:
        return f"{_plural(days, 'day')} ago"

    months = round(days / 30)
    if months < 12:
        prefix = "about " if months == 1 else ""
        return f"{prefix}{_plural(months, 'month')} ago"

    years = round(months / 12)
    return f"about {_plural(years, 'year')} ago"


def pod_activity_label(member_count: int) -> str:
    """Classify a pod's activity from its member count."""
    if member_count >= 8:
        return "Very Active"
    if member_count >= 5:
        return "Active"
    return "Growing"
