"""Review listing and curation endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse

from reviewboard.api.dependencies import get_service
from reviewboard.api.schemas import ApprovalResponse, DeleteResponse, ListingsResponse
from reviewboard.models.filters import ReviewFilters
from reviewboard.service import ReviewDashboardService

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.get("/hostaway", response_model=ListingsResponse)
def get_listings(
    listing: Optional[str] = None,
    type: Optional[str] = None,
    channel: Optional[str] = None,
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    min_rating: Optional[str] = Query(None, alias="minRating"),
    sort: Optional[str] = None,
    approved_only: Optional[str] = Query(None, alias="approvedOnly"),
    service: ReviewDashboardService = Depends(get_service),
) -> dict:
    """Return per-listing review bundles for the given filters."""
    filters = ReviewFilters.from_query({
        "listing": listing,
        "type": type,
        "channel": channel,
        "from": date_from,
        "to": date_to,
        "minRating": min_rating,
        "sort": sort,
        "approvedOnly": approved_only,
    })
    return service.get_normalized_listings(filters).to_dict()


@router.post("/{review_id}/approve", response_model=ApprovalResponse)
async def approve_review(
    review_id: str,
    request: Request,
    response: Response,
    service: ReviewDashboardService = Depends(get_service),
) -> ApprovalResponse:
    """Set approval from an optional {"approved": bool} body, or toggle it."""
    approved = None
    try:
        body = await request.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("approved"), bool):
        approved = body["approved"]

    result = service.set_approval(_coerce_id(review_id), approved)
    if not result.success:
        response.status_code = 404
    return ApprovalResponse(**result.to_dict())


@router.delete("/{review_id}", response_model=DeleteResponse)
def delete_review(
    review_id: str,
    response: Response,
    service: ReviewDashboardService = Depends(get_service),
) -> DeleteResponse:
    """Delete a review."""
    ok = service.delete_review(_coerce_id(review_id))
    if not ok:
        response.status_code = 404
    return DeleteResponse(success=ok)


@router.get("/google")
def get_google_reviews(place_id: Optional[str] = Query(None, alias="placeId")) -> JSONResponse:
    """Placeholder for a Google Places reviews proxy."""
    if not place_id:
        return JSONResponse(status_code=400, content={"error": "placeId is required"})
    return JSONResponse(
        status_code=501,
        content={"error": "Google Reviews integration is not implemented."},
    )


def _coerce_id(review_id: str):
    """Numeric path ids address integer-keyed records."""
    return int(review_id) if review_id.isdigit() else review_id
