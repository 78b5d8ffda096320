"""
Review data model.

Represents a single guest/host feedback record as stored in the review file.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

REVIEW_TYPES = ("guest-to-host", "host-to-guest")
REVIEW_STATUSES = ("awaiting", "pending", "scheduled", "submitted", "published", "expired")

# Keys owned by the dataclass; anything else on a record is carried in `extra`
_KNOWN_KEYS = {
    "id",
    "type",
    "status",
    "rating",
    "publicReview",
    "reviewCategory",
    "submittedAt",
    "guestName",
    "listingName",
    "channel",
    "approved",
}

ReviewId = Union[int, str]


@dataclass
class ReviewCategory:
    """A sub-rating on a 10-point scale (e.g. cleanliness)."""
    category: str
    rating: float

    def __post_init__(self):
        if isinstance(self.rating, bool) or not isinstance(self.rating, (int, float)):
            raise ValueError(f"Invalid score for category {self.category!r}: {self.rating!r}")

    @classmethod
    def from_dict(cls, data: dict) -> "ReviewCategory":
        return cls(category=data["category"], rating=data["rating"])

    def to_dict(self) -> dict:
        return {"category": self.category, "rating": self.rating}


@dataclass
class Review:
    """
    A guest or host review for one listing.

    `rating` is on a 1-5 scale and may be missing, in which case the
    category scores (10-point scale) carry the rating signal.
    """
    id: ReviewId
    type: str  # "guest-to-host" or "host-to-guest"
    status: str
    listing_name: str  # Grouping key
    channel: str
    submitted_at: str  # ISO-8601 timestamp
    rating: Optional[float] = None
    public_review: Optional[str] = None
    review_category: List[ReviewCategory] = field(default_factory=list)
    guest_name: Optional[str] = None
    approved: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.type not in REVIEW_TYPES:
            raise ValueError(
                f"Invalid type: {self.type}. Must be one of {', '.join(REVIEW_TYPES)}"
            )

        if self.status not in REVIEW_STATUSES:
            raise ValueError(
                f"Invalid status: {self.status}. Must be one of {', '.join(REVIEW_STATUSES)}"
            )

        if not self.listing_name:
            raise ValueError(f"Review {self.id} has no listing name")

        if isinstance(self.rating, bool) or (
            self.rating is not None and not isinstance(self.rating, (int, float))
        ):
            raise ValueError(f"Invalid rating for review {self.id}: {self.rating!r}")

    @classmethod
    def from_dict(cls, data: dict) -> "Review":
        """Create Review from a stored JSON record (camelCase keys)."""
        return cls(
            id=data["id"],
            type=data["type"],
            status=data["status"],
            listing_name=data["listingName"],
            channel=data.get("channel", ""),
            submitted_at=data.get("submittedAt", ""),
            rating=data.get("rating"),
            public_review=data.get("publicReview"),
            review_category=[
                ReviewCategory.from_dict(c) for c in data.get("reviewCategory") or []
            ],
            guest_name=data.get("guestName"),
            approved=data.get("approved") is True,
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_dict(self) -> dict:
        """Convert to the JSON wire form."""
        data = {
            "id": self.id,
            "type": self.type,
            "status": self.status,
            "rating": self.rating,
            "publicReview": self.public_review,
            "reviewCategory": [c.to_dict() for c in self.review_category],
            "submittedAt": self.submitted_at,
            "listingName": self.listing_name,
            "channel": self.channel,
            "approved": self.approved,
        }
        if self.guest_name is not None:
            data["guestName"] = self.guest_name
        data.update(self.extra)
        return data
