"""
Date helpers.

Timestamp parsing and month bucketing shared by filtering and aggregation.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or timestamp into an aware UTC datetime.

    Naive values (including bare dates) are taken as UTC.

    Args:
        value: Date string, e.g. "2024-03-01" or "2024-03-01T10:15:00Z"

    Returns:
        Aware datetime in UTC, or None if the value is empty or unparseable
    """
    if not value or not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unparseable timestamp: {value!r}")
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def month_key(moment: datetime) -> str:
    """Return the UTC calendar month of a datetime as YYYY-MM."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return f"{moment.year:04d}-{moment.month:02d}"
