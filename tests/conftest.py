"""
Shared fixtures for the review dashboard tests.
"""

import json

import pytest

from reviewboard.models.review import Review, ReviewCategory


def build_review(review_id=1, listing_name="Bayside Retreat", rating=None, categories=None, **overrides):
    """Build a Review with sensible defaults; categories is a {name: score} dict."""
    fields = dict(
        id=review_id,
        type="guest-to-host",
        status="published",
        listing_name=listing_name,
        channel="airbnb",
        submitted_at="2024-06-15T12:00:00Z",
        rating=rating,
        public_review="",
        review_category=[
            ReviewCategory(category=name, rating=score)
            for name, score in (categories or {}).items()
        ],
    )
    fields.update(overrides)
    return Review(**fields)


@pytest.fixture
def make_review():
    """Factory fixture for Review objects."""
    return build_review


@pytest.fixture
def bayside_reviews():
    """Three Bayside Retreat reviews resolving to ratings 4.0, 4 and 2."""
    return [
        build_review(1, rating=None, categories={"cleanliness": 8, "communication": 8}),
        build_review(2, rating=4, categories={"cleanliness": 10}, channel="booking.com",
                     submitted_at="2024-07-02T09:00:00Z"),
        build_review(3, rating=2, channel="airbnb", submitted_at="2024-07-20T18:30:00Z"),
    ]


@pytest.fixture
def sample_records():
    """Raw review records as stored on disk."""
    return [
        {
            "id": 7,
            "type": "guest-to-host",
            "status": "published",
            "rating": 4,
            "publicReview": "Great stay",
            "reviewCategory": [{"category": "cleanliness", "rating": 9}],
            "submittedAt": "2024-06-01T10:00:00Z",
            "guestName": "Ana",
            "listingName": "Bayside Retreat",
            "channel": "airbnb",
        },
        {
            "id": 8,
            "type": "guest-to-host",
            "status": "published",
            "rating": 1,
            "publicReview": "The room was dirty",
            "reviewCategory": [],
            "submittedAt": "2024-07-01T10:00:00Z",
            "listingName": "Camden Loft Studio",
            "channel": "direct",
            "approved": True,
        },
    ]


@pytest.fixture
def reviews_file(tmp_path, sample_records):
    """Path to a temporary reviews JSON file seeded with sample_records."""
    path = tmp_path / "reviews.json"
    path.write_text(json.dumps(sample_records, indent=2), encoding="utf-8")
    return path
