"""
Listing bundle data model.

Aggregated statistics for one listing over a filtered review set.
Bundles are recomputed on every query and never persisted.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from reviewboard.models.review import Review


@dataclass
class TrendPoint:
    """Average rating for one calendar month."""
    date: str  # YYYY-MM
    rating_avg: Optional[float]

    def to_dict(self) -> dict:
        return {"date": self.date, "ratingAvg": self.rating_avg}


@dataclass
class ListingBundle:
    """
    Per-listing aggregate.

    `category_averages` and `rating_avg` are on a 5-point scale,
    rounded to two decimals.
    """
    listing_id: str  # Slug of listing_name
    listing_name: str
    rating_avg: Optional[float] = None
    category_averages: Dict[str, float] = field(default_factory=dict)
    channel_stats: Dict[str, int] = field(default_factory=dict)
    reviews: List[Review] = field(default_factory=list)
    trend: List[TrendPoint] = field(default_factory=list)

    @property
    def review_count(self) -> int:
        return len(self.reviews)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "listingId": self.listing_id,
            "listingName": self.listing_name,
            "ratingAvg": self.rating_avg,
            "categoryAverages": dict(self.category_averages),
            "channelStats": dict(self.channel_stats),
            "reviews": [r.to_dict() for r in self.reviews],
            "trend": [p.to_dict() for p in self.trend],
        }


@dataclass
class ListingsResult:
    """Assembled query output: bundles, totals and the echoed filters."""
    listings: List[ListingBundle] = field(default_factory=list)
    review_count: int = 0
    listing_count: int = 0
    filters: Dict[str, object] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "listings": [b.to_dict() for b in self.listings],
            "totals": {
                "reviewCount": self.review_count,
                "listingCount": self.listing_count,
            },
            "filters": dict(self.filters),
        }
