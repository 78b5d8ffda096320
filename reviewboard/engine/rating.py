"""
Rating resolution.

Determines the effective 1-5 rating of a review.
"""

from typing import Optional

from reviewboard.models.review import Review


def resolve_rating(review: Review) -> Optional[float]:
    """
    Return the explicit rating, or derive one from the category scores.

    Category scores are on a 10-point scale and are halved before
    averaging. No rounding is applied.

    Returns:
        Rating on a 1-5 scale, or None if the review carries no rating signal
    """
    if review.rating is not None:
        return review.rating

    if review.review_category:
        halves = [c.rating / 2 for c in review.review_category]
        return sum(halves) / len(halves)

    return None
