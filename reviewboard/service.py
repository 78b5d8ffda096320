"""
Review Dashboard Service.

Coordinates the review store with the filter, aggregation and assembly
stages, and exposes the curation mutations.
"""

import logging
from typing import Optional

from reviewboard.engine.aggregation import find_slug_collisions
from reviewboard.engine.assembler import build_listings
from reviewboard.models.filters import ReviewFilters
from reviewboard.models.listing import ListingsResult
from reviewboard.models.review import ReviewId
from reviewboard.store.review_store import ApprovalResult, ReviewStore

logger = logging.getLogger(__name__)


class ReviewDashboardService:
    """
    Query and curation entry point for the dashboard.

    Flow per query:
    Store -> Filter Engine -> Aggregation -> Bundle Assembler
    """

    def __init__(self, store: ReviewStore):
        """
        Initialize the service.

        Args:
            store: Review store to read from and mutate
        """
        self.store = store

    def get_normalized_listings(self, filters: Optional[ReviewFilters] = None) -> ListingsResult:
        """
        Compute listing bundles for the given filters.

        Args:
            filters: Optional filters; None means no filtering

        Returns:
            ListingsResult with listings, totals and the filter echo
        """
        filters = filters or ReviewFilters()
        reviews = self.store.read_all()

        result = build_listings(reviews, filters)

        collisions = find_slug_collisions(result.listings)
        for slug, names in collisions.items():
            logger.warning(f"Listing id {slug!r} is shared by {len(names)} listings: {names}")

        logger.info(
            f"Listings query: {result.review_count} reviews across "
            f"{result.listing_count} listings (filters={result.filters})"
        )
        return result

    def set_approval(self, review_id: ReviewId, approved: Optional[bool] = None) -> ApprovalResult:
        """Set or toggle whether a review is shown publicly."""
        return self.store.set_approval(review_id, approved)

    def delete_review(self, review_id: ReviewId) -> bool:
        """Delete a review. Returns False if it does not exist."""
        return self.store.delete(review_id)
