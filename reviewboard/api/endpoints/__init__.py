"""Expose API endpoint routers."""

from reviewboard.api.endpoints import issues, reviews

__all__ = ["issues", "reviews"]
