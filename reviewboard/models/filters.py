"""
Review filter model.

Typed form of the dashboard query parameters. Malformed values are
dropped rather than rejected, so every query shape maps to a filter set.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from reviewboard.utils.dates import parse_timestamp

logger = logging.getLogger(__name__)

SORT_ORDERS = ("asc", "desc")


@dataclass(frozen=True)
class ReviewFilters:
    """
    Independently optional review filters, combined with logical AND.

    `date_from` and `date_to` keep the caller's original strings; they are
    only set when they parse as timestamps.
    """
    listing: Optional[str] = None
    type: Optional[str] = None
    channel: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    min_rating: Optional[float] = None
    sort: Optional[str] = None
    approved_only: bool = False

    @classmethod
    def from_query(cls, params: Mapping[str, Optional[str]]) -> "ReviewFilters":
        """
        Build filters from raw query parameters.

        Args:
            params: Mapping of query parameter name to raw string value
                (listing, type, channel, from, to, minRating, sort, approvedOnly)

        Returns:
            ReviewFilters with every malformed value treated as absent
        """
        def text(name: str) -> Optional[str]:
            value = params.get(name)
            return value if value else None

        date_from = text("from")
        if date_from and parse_timestamp(date_from) is None:
            logger.debug(f"Ignoring unparseable 'from' filter: {date_from!r}")
            date_from = None

        date_to = text("to")
        if date_to and parse_timestamp(date_to) is None:
            logger.debug(f"Ignoring unparseable 'to' filter: {date_to!r}")
            date_to = None

        sort = text("sort")
        if sort and sort not in SORT_ORDERS:
            logger.debug(f"Ignoring unknown sort order: {sort!r}")
            sort = None

        return cls(
            listing=text("listing"),
            type=text("type"),
            channel=text("channel"),
            date_from=date_from,
            date_to=date_to,
            min_rating=_parse_threshold(text("minRating")),
            sort=sort,
            approved_only=params.get("approvedOnly") == "true",
        )

    def without_listing(self) -> "ReviewFilters":
        """Return a copy with the listing filter removed."""
        return replace(self, listing=None)

    def is_empty(self) -> bool:
        return self == ReviewFilters()

    def to_dict(self) -> dict:
        """Echo of the applied filters using the query parameter names."""
        echo = {}
        if self.listing:
            echo["listing"] = self.listing
        if self.type:
            echo["type"] = self.type
        if self.channel:
            echo["channel"] = self.channel
        if self.date_from:
            echo["from"] = self.date_from
        if self.date_to:
            echo["to"] = self.date_to
        if self.min_rating is not None:
            echo["minRating"] = self.min_rating
        if self.sort:
            echo["sort"] = self.sort
        if self.approved_only:
            echo["approvedOnly"] = True
        return echo


def _parse_threshold(value: Optional[str]) -> Optional[float]:
    """Parse a numeric rating threshold; non-numeric input means no threshold."""
    if value is None:
        return None
    try:
        threshold = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric minRating: {value!r}")
        return None
    if math.isnan(threshold) or math.isinf(threshold):
        logger.debug(f"Ignoring non-finite minRating: {value!r}")
        return None
    return threshold
