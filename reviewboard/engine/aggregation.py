"""
Listing Aggregator.

Groups filtered reviews by listing and computes per-listing rating,
category, channel and monthly trend statistics.
"""

import logging
import re
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional

from reviewboard.engine.rating import resolve_rating
from reviewboard.models.listing import ListingBundle, TrendPoint
from reviewboard.models.review import Review
from reviewboard.utils.dates import month_key, parse_timestamp

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_CENTS = Decimal("0.01")


def slugify(listing_name: str) -> str:
    """Lower-case the name and collapse whitespace runs into single hyphens."""
    return _WHITESPACE.sub("-", listing_name.lower())


def round_half_up(value: float) -> float:
    """Round to 2 decimals with halves away from zero (4.125 -> 4.13)."""
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def aggregate(reviews: List[Review]) -> List[ListingBundle]:
    """
    Build one ListingBundle per distinct listing name.

    Listing names are compared exactly (case-sensitive). Bundles follow the
    first-seen order of listing names in the input.

    Args:
        reviews: Filtered review list

    Returns:
        List of ListingBundle objects (empty for empty input)
    """
    groups: Dict[str, List[Review]] = {}
    for review in reviews:
        groups.setdefault(review.listing_name, []).append(review)

    bundles = [_build_bundle(name, members) for name, members in groups.items()]

    logger.debug(f"Aggregated {len(reviews)} reviews into {len(bundles)} listings")
    return bundles


def find_slug_collisions(bundles: List[ListingBundle]) -> Dict[str, List[str]]:
    """
    Find listing ids shared by more than one listing name.

    Returns:
        Mapping of listing_id -> distinct listing names sharing it
    """
    names_by_slug: Dict[str, List[str]] = {}
    for bundle in bundles:
        names = names_by_slug.setdefault(bundle.listing_id, [])
        if bundle.listing_name not in names:
            names.append(bundle.listing_name)

    return {slug: names for slug, names in names_by_slug.items() if len(names) > 1}


def _build_bundle(listing_name: str, members: List[Review]) -> ListingBundle:
    """Compute statistics for the members of one listing."""
    ratings = [resolve_rating(r) for r in members]

    return ListingBundle(
        listing_id=slugify(listing_name),
        listing_name=listing_name,
        rating_avg=_mean(ratings),
        category_averages=_category_averages(members),
        channel_stats=dict(Counter(r.channel for r in members)),
        reviews=list(members),
        trend=_monthly_trend(members, ratings),
    )


def _mean(values: List[Optional[float]]) -> Optional[float]:
    """Mean of the non-None values, rounded to 2 decimals; None if there are none."""
    present = [v for v in values if v is not None]
    if not present:
        return None
    return round_half_up(sum(present) / len(present))


def _category_averages(members: List[Review]) -> Dict[str, float]:
    """Average each category's 10-point scores and convert to a 5-point scale."""
    totals: Dict[str, float] = {}
    counts: Counter = Counter()

    for review in members:
        for category in review.review_category:
            totals[category.category] = totals.get(category.category, 0.0) + category.rating
            counts[category.category] += 1

    return {
        name: round_half_up((totals[name] / counts[name]) / 2)
        for name in totals
    }


def _monthly_trend(members: List[Review], ratings: List[Optional[float]]) -> List[TrendPoint]:
    """Average resolved rating per UTC month, ascending by month key."""
    by_month: Dict[str, List[Optional[float]]] = {}

    for review, rating in zip(members, ratings):
        submitted = parse_timestamp(review.submitted_at)
        if submitted is None:
            logger.warning(
                f"Review {review.id} has unparseable submittedAt {review.submitted_at!r}, "
                f"excluded from trend"
            )
            continue
        by_month.setdefault(month_key(submitted), []).append(rating)

    return [
        TrendPoint(date=month, rating_avg=_mean(by_month[month]))
        for month in sorted(by_month)
    ]
