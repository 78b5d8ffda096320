"""
Unit tests for the Bundle Assembler.
"""

import pytest

from reviewboard.engine.aggregation import aggregate
from reviewboard.engine.assembler import assemble, build_listings
from reviewboard.models.filters import ReviewFilters


@pytest.fixture
def three_listings(make_review):
    return [
        make_review(1, listing_name="Camden Loft Studio", rating=3),
        make_review(2, listing_name="Bayside Retreat", rating=5),
        make_review(3, listing_name="Unrated Cottage", rating=None, categories={}),
        make_review(4, listing_name="Bayside Retreat", rating=4, channel="direct"),
    ]


def names(result):
    return [b.listing_name for b in result.listings]


def test_unsorted_keeps_aggregation_order(three_listings):
    result = assemble(aggregate(three_listings))
    assert names(result) == ["Camden Loft Studio", "Bayside Retreat", "Unrated Cottage"]


def test_sort_ascending_treats_null_as_zero(three_listings):
    result = assemble(aggregate(three_listings), sort="asc")
    assert names(result) == ["Unrated Cottage", "Camden Loft Studio", "Bayside Retreat"]


def test_sort_descending(three_listings):
    result = assemble(aggregate(three_listings), sort="desc")
    assert names(result) == ["Bayside Retreat", "Camden Loft Studio", "Unrated Cottage"]


def test_totals(three_listings):
    result = assemble(aggregate(three_listings))
    assert result.review_count == 4
    assert result.listing_count == 3


def test_totals_count_filtered_reviews_only(three_listings):
    result = build_listings(three_listings, ReviewFilters(channel="direct"))
    assert result.review_count == 1
    assert result.listing_count == 1
    assert result.filters == {"channel": "direct"}


def test_empty_result_is_well_formed():
    result = build_listings([], ReviewFilters(listing="anything"))
    assert result.to_dict() == {
        "listings": [],
        "totals": {"reviewCount": 0, "listingCount": 0},
        "filters": {"listing": "anything"},
    }


def test_listing_id_fallback(bayside_reviews, make_review):
    """A slug that is not a substring of any name resolves by listing id."""
    reviews = bayside_reviews + [make_review(9, listing_name="Camden Loft Studio", rating=5)]

    result = build_listings(reviews, ReviewFilters(listing="bayside-retreat"))

    assert names(result) == ["Bayside Retreat"]
    assert result.review_count == 3
    assert result.listing_count == 1
    assert result.filters == {"listing": "bayside-retreat"}


def test_listing_id_fallback_keeps_other_filters(bayside_reviews):
    result = build_listings(bayside_reviews, ReviewFilters(listing="bayside-retreat", min_rating=3))

    assert result.listing_count == 1
    assert result.review_count == 2
    assert result.listings[0].rating_avg == 4.0


def test_listing_id_fallback_requires_exact_slug(bayside_reviews):
    result = build_listings(bayside_reviews, ReviewFilters(listing="bayside-retr"))
    assert result.listing_count == 0


def test_name_match_skips_fallback(bayside_reviews):
    result = build_listings(bayside_reviews, ReviewFilters(listing="bayside"))
    assert names(result) == ["Bayside Retreat"]


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
