"""AI-assisted bad review detection endpoint."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from reviewboard.agents.issue_detection import IssueDetectionAgent
from reviewboard.api.dependencies import get_issue_agent, get_store
from reviewboard.store.review_store import ReviewStore, ReviewStoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.get("/bad-reviews")
def bad_reviews(
    store: ReviewStore = Depends(get_store),
    agent: IssueDetectionAgent = Depends(get_issue_agent),
) -> JSONResponse:
    """Return reviews flagged as needing host attention."""
    try:
        reviews = store.read_all()
    except ReviewStoreError as exc:
        logger.error(f"Bad review detection failed: {exc}")
        return JSONResponse(
            status_code=500,
            content={"source": "error", "message": "failed to read reviews"},
        )

    report = agent.detect(reviews)
    return JSONResponse(status_code=200, content=report.to_dict())
