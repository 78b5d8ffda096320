"""
Integration tests for the dashboard HTTP API.

Note: The issue detector runs without an API key, so no Gemini calls are made.
"""

import json
import os

import pytest
from fastapi.testclient import TestClient

from reviewboard.agents.issue_detection import IssueDetectionAgent
from reviewboard.api.app import app
from reviewboard.api.dependencies import get_issue_agent, get_store
from reviewboard.store.review_store import JsonReviewStore


@pytest.fixture
def store(reviews_file):
    return JsonReviewStore(str(reviews_file))


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_issue_agent] = lambda: IssueDetectionAgent(keywords=("dirty",))
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_hostaway_listings(client):
    response = client.get("/api/reviews/hostaway", params={"sort": "desc"})
    assert response.status_code == 200

    body = response.json()
    assert body["totals"] == {"reviewCount": 2, "listingCount": 2}
    assert body["filters"] == {"sort": "desc"}

    first = body["listings"][0]
    assert first["listingId"] == "bayside-retreat"
    assert first["ratingAvg"] == 4.0
    assert first["categoryAverages"] == {"cleanliness": 4.5}
    assert first["channelStats"] == {"airbnb": 1}
    assert first["trend"] == [{"date": "2024-06", "ratingAvg": 4.0}]
    assert first["reviews"][0]["guestName"] == "Ana"


def test_hostaway_ignores_malformed_threshold(client):
    response = client.get("/api/reviews/hostaway", params={"minRating": "abc", "channel": "direct"})
    body = response.json()

    assert body["filters"] == {"channel": "direct"}
    assert [b["listingName"] for b in body["listings"]] == ["Camden Loft Studio"]


def test_hostaway_listing_id_fallback(client):
    response = client.get("/api/reviews/hostaway", params={"listing": "camden-loft-studio"})
    body = response.json()

    assert body["totals"]["listingCount"] == 1
    assert body["listings"][0]["listingName"] == "Camden Loft Studio"
    assert body["filters"] == {"listing": "camden-loft-studio"}


def test_approve_with_body(client, reviews_file):
    response = client.post("/api/reviews/7/approve", json={"approved": True})

    assert response.status_code == 200
    assert response.json() == {"success": True, "approved": True}
    assert json.loads(reviews_file.read_text())[0]["approved"] is True


def test_approve_without_body_toggles(client):
    response = client.post("/api/reviews/8/approve")
    assert response.json() == {"success": True, "approved": False}

    listings = client.get("/api/reviews/hostaway", params={"approvedOnly": "true"}).json()
    assert listings["totals"]["reviewCount"] == 0


def test_approve_unknown_review(client):
    response = client.post("/api/reviews/999/approve", json={"approved": True})
    assert response.status_code == 404
    assert response.json() == {"success": False, "approved": False}


def test_delete_review(client):
    first = client.delete("/api/reviews/7")
    assert first.status_code == 200
    assert first.json() == {"success": True}

    second = client.delete("/api/reviews/7")
    assert second.status_code == 404
    assert second.json() == {"success": False}


def test_google_placeholder(client):
    assert client.get("/api/reviews/google").status_code == 400
    assert client.get("/api/reviews/google", params={"placeId": "abc"}).status_code == 501


def test_bad_reviews_heuristic(client):
    response = client.get("/api/ai/bad-reviews")
    assert response.status_code == 200

    body = response.json()
    assert body["source"] == "heuristic"
    assert [r["id"] for r in body["issues"]] == [8]


def test_bad_reviews_store_failure(client, reviews_file, store):
    reviews_file.unlink()
    store.invalidate()

    response = client.get("/api/ai/bad-reviews")
    assert response.status_code == 500
    assert response.json() == {"source": "error", "message": "failed to read reviews"}


def test_listings_see_approval_from_another_process(client, reviews_file):
    """An approval written by a separate store (the CLI) reaches the running API."""
    assert client.get("/api/reviews/hostaway", params={"approvedOnly": "true"}).json()["totals"]["reviewCount"] == 1

    previous = os.stat(reviews_file).st_mtime_ns
    JsonReviewStore(str(reviews_file)).set_approval(7, True)
    os.utime(reviews_file, ns=(previous + 10**9, previous + 10**9))

    body = client.get("/api/reviews/hostaway", params={"approvedOnly": "true"}).json()
    assert body["totals"]["reviewCount"] == 2


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
