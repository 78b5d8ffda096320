"""
Filter Engine.

Selects the reviews matching a set of ReviewFilters.
"""

import logging
from typing import Callable, List

from reviewboard.engine.rating import resolve_rating
from reviewboard.models.filters import ReviewFilters
from reviewboard.models.review import Review
from reviewboard.utils.dates import parse_timestamp

logger = logging.getLogger(__name__)

Predicate = Callable[[Review], bool]


def apply_filters(reviews: List[Review], filters: ReviewFilters) -> List[Review]:
    """
    Return the reviews that satisfy every filter present.

    Args:
        reviews: Full review list
        filters: Filter criteria; absent filters match everything

    Returns:
        Matching reviews in input order
    """
    predicates = build_predicates(filters)
    if not predicates:
        return list(reviews)

    filtered = [r for r in reviews if all(p(r) for p in predicates)]

    logger.debug(f"Filtered {len(reviews)} reviews down to {len(filtered)} with {filters.to_dict()}")
    return filtered


def build_predicates(filters: ReviewFilters) -> List[Predicate]:
    """Translate each present filter into an independent predicate."""
    predicates: List[Predicate] = []

    if filters.listing:
        query = filters.listing.lower()
        predicates.append(lambda r: query in r.listing_name.lower())

    if filters.type:
        predicates.append(lambda r: r.type == filters.type)

    if filters.channel:
        predicates.append(lambda r: r.channel == filters.channel)

    if filters.approved_only:
        predicates.append(lambda r: r.approved is True)

    from_date = parse_timestamp(filters.date_from)
    if from_date is not None:
        predicates.append(lambda r: _submitted_on_or_after(r, from_date))

    to_date = parse_timestamp(filters.date_to)
    if to_date is not None:
        predicates.append(lambda r: _submitted_on_or_before(r, to_date))

    if filters.min_rating is not None:
        threshold = filters.min_rating
        predicates.append(lambda r: _rated_at_least(r, threshold))

    return predicates


def _submitted_on_or_after(review: Review, bound) -> bool:
    submitted = parse_timestamp(review.submitted_at)
    return submitted is not None and submitted >= bound


def _submitted_on_or_before(review: Review, bound) -> bool:
    submitted = parse_timestamp(review.submitted_at)
    return submitted is not None and submitted <= bound


def _rated_at_least(review: Review, threshold: float) -> bool:
    rating = resolve_rating(review)
    return rating is not None and rating >= threshold
