"""
Review Store - durable record list behind the dashboard.

Loads review records and persists the two supported mutations:
approval changes and deletions.
"""

import json
import logging
import os
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from reviewboard.models.review import Review, ReviewId

logger = logging.getLogger(__name__)


class ReviewStoreError(Exception):
    """Raised when the review records cannot be read or written."""


@dataclass
class ApprovalResult:
    success: bool
    approved: bool

    def to_dict(self) -> dict:
        return {"success": self.success, "approved": self.approved}


class ReviewStore(ABC):
    """
    Storage contract used by the dashboard service.

    Every successful mutation must be visible to the next read_all().
    """

    @abstractmethod
    def read_all(self) -> List[Review]:
        """Return every valid review record."""

    @abstractmethod
    def set_approval(self, review_id: ReviewId, approved: Optional[bool] = None) -> ApprovalResult:
        """Set the approval flag, or toggle it when `approved` is None."""

    @abstractmethod
    def delete(self, review_id: ReviewId) -> bool:
        """Delete a review. Returns False if it does not exist."""

    def invalidate(self) -> None:
        """Drop any cached read state."""


class JsonReviewStore(ReviewStore):
    """
    Review store backed by a JSON array file.

    Reads are cached on the instance until the next successful mutation
    or until the file modification time changes (e.g. a CLI edit while the
    API is serving).
    Writes go through a temp file and an atomic rename, keeping one
    `.backup` copy of the previous file. Single writer assumed.
    """

    def __init__(self, reviews_path: str):
        """
        Initialize the store.

        Args:
            reviews_path: Path to the reviews JSON file
        """
        self.reviews_path = str(reviews_path)
        self._cache: Optional[List[Review]] = None
        self._cache_mtime: Optional[int] = None

        logger.info(f"Initialized JsonReviewStore with reviews_path={self.reviews_path}")

    def read_all(self) -> List[Review]:
        """
        Load all reviews.

        Records that fail validation are skipped with a warning.

        Returns:
            List of Review objects

        Raises:
            ReviewStoreError: If the file is missing or not a JSON array
        """
        mtime = self._file_mtime()
        if self._cache is not None and mtime == self._cache_mtime:
            return list(self._cache)

        reviews = []
        for record in self._read_records():
            try:
                reviews.append(Review.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                record_id = record.get("id") if isinstance(record, dict) else None
                logger.warning(f"Skipping invalid review record {record_id!r}: {e}")
                continue

        self._cache = reviews
        self._cache_mtime = mtime
        logger.debug(f"Loaded {len(reviews)} reviews from {self.reviews_path}")
        return list(reviews)

    def set_approval(self, review_id: ReviewId, approved: Optional[bool] = None) -> ApprovalResult:
        """
        Set or toggle the approval flag of a review.

        Args:
            review_id: Review identifier (int and str forms are equivalent)
            approved: Explicit new state, or None to toggle

        Returns:
            ApprovalResult; success is False if the review does not exist
        """
        records = self._read_records()
        index = self._find_index(records, review_id)
        if index is None:
            logger.warning(f"Cannot change approval: review {review_id} not found")
            return ApprovalResult(success=False, approved=False)

        current = records[index].get("approved") is True
        new_value = approved if isinstance(approved, bool) else not current
        records[index]["approved"] = new_value

        self._write_records(records)
        logger.info(f"Review {review_id} approval set to {new_value}")
        return ApprovalResult(success=True, approved=new_value)

    def delete(self, review_id: ReviewId) -> bool:
        """
        Delete a review by id.

        Returns:
            True if the review was removed, False if it does not exist
        """
        records = self._read_records()
        index = self._find_index(records, review_id)
        if index is None:
            logger.warning(f"Cannot delete: review {review_id} not found")
            return False

        del records[index]
        self._write_records(records)
        logger.info(f"Deleted review {review_id}")
        return True

    def invalidate(self) -> None:
        self._cache = None
        self._cache_mtime = None

    def _file_mtime(self) -> Optional[int]:
        try:
            return os.stat(self.reviews_path).st_mtime_ns
        except OSError:
            return None

    def _read_records(self) -> List[dict]:
        """Read the raw record list from disk."""
        try:
            with open(self.reviews_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            logger.error(f"Reviews file not found: {self.reviews_path}")
            raise ReviewStoreError(f"Reviews file not found: {self.reviews_path}") from e
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read reviews from {self.reviews_path}: {e}")
            raise ReviewStoreError(f"Failed to read reviews: {e}") from e

        if not isinstance(data, list):
            raise ReviewStoreError(
                f"Expected a JSON array in {self.reviews_path}, got {type(data).__name__}"
            )
        return data

    def _write_records(self, records: List[dict]) -> None:
        """Persist the record list atomically and invalidate the read cache."""
        if os.path.exists(self.reviews_path):
            backup_path = f"{self.reviews_path}.backup"
            shutil.copy(self.reviews_path, backup_path)
            logger.debug(f"Created backup: {backup_path}")

        temp_path = f"{self.reviews_path}.tmp"
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, self.reviews_path)
        except Exception as e:
            logger.error(f"Failed to save reviews: {e}")
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

        self.invalidate()

    @staticmethod
    def _find_index(records: List[dict], review_id: ReviewId) -> Optional[int]:
        target = str(review_id)
        for index, record in enumerate(records):
            if isinstance(record, dict) and str(record.get("id")) == target:
                return index
        return None
