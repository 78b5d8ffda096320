"""
Bundle Assembler.

Orders listing bundles, computes totals, and resolves listing lookups
that were made by slug rather than by display name.
"""

import logging
from typing import List, Optional

from reviewboard.engine.aggregation import aggregate
from reviewboard.engine.filtering import apply_filters
from reviewboard.models.filters import ReviewFilters
from reviewboard.models.listing import ListingBundle, ListingsResult
from reviewboard.models.review import Review

logger = logging.getLogger(__name__)


def assemble(bundles: List[ListingBundle], sort: Optional[str] = None) -> ListingsResult:
    """
    Sort bundles by average rating and package totals.

    Args:
        bundles: Aggregated bundles
        sort: "asc", "desc", or None to keep aggregation order.
            Listings without a rating sort as 0.

    Returns:
        ListingsResult (filters left empty for the caller to fill)
    """
    ordered = list(bundles)
    if sort == "asc":
        ordered.sort(key=_sort_key)
    elif sort == "desc":
        ordered.sort(key=_sort_key, reverse=True)

    return ListingsResult(
        listings=ordered,
        review_count=sum(b.review_count for b in ordered),
        listing_count=len(ordered),
    )


def build_listings(reviews: List[Review], filters: ReviewFilters) -> ListingsResult:
    """
    Run filter, aggregate and assemble over the full review list.

    When a listing filter matches no listing name, it is retried as an
    exact listing id (slug) lookup over the remaining filters.

    Args:
        reviews: Full, unfiltered review list
        filters: Requested filters

    Returns:
        ListingsResult with the filter echo attached
    """
    result = assemble(aggregate(apply_filters(reviews, filters)), filters.sort)

    if filters.listing and result.listing_count == 0:
        logger.debug(f"No listing name contains {filters.listing!r}, trying listing id lookup")
        relaxed = aggregate(apply_filters(reviews, filters.without_listing()))
        matched = [b for b in relaxed if b.listing_id == filters.listing]
        if matched:
            logger.info(f"Resolved listing id {filters.listing!r} to {len(matched)} listing(s)")
            result = assemble(matched, filters.sort)

    result.filters = filters.to_dict()
    return result


def _sort_key(bundle: ListingBundle) -> float:
    return bundle.rating_avg if bundle.rating_avg is not None else 0
