"""FastAPI dependencies: store, service and issue detector."""

from functools import lru_cache

from fastapi import Depends

import config.settings as settings
from reviewboard.agents.issue_detection import IssueDetectionAgent, create_issue_agent
from reviewboard.service import ReviewDashboardService
from reviewboard.store.review_store import JsonReviewStore, ReviewStore


@lru_cache
def get_store() -> ReviewStore:
    """
    Return the process-wide review store.

    Edits made by other processes (e.g. the CLI) are picked up through the
    store's file modification time check.
    """
    return JsonReviewStore(str(settings.REVIEWS_PATH))


def get_service(store: ReviewStore = Depends(get_store)) -> ReviewDashboardService:
    return ReviewDashboardService(store)


@lru_cache
def get_issue_agent() -> IssueDetectionAgent:
    """Return the issue detection agent configured from settings."""
    return create_issue_agent()
