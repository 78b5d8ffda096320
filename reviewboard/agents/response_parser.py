"""
Issue detection response parser.

Turns raw model output into bad-review flags through a fixed chain:
strict JSON parse, then the first embedded {...} object. Callers fall
back to the heuristic detector when both stages fail.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

_EMBEDDED_OBJECT = re.compile(r"\{[\s\S]*\}")


@dataclass
class BadReviewFlag:
    """One review the model marked as needing attention."""
    review_id: str  # Compared by string form
    reason: str = ""


def parse_strict_json(text: str) -> Optional[dict]:
    """Stage 1: the whole text is a JSON object."""
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        logger.debug(f"Strict JSON parse failed: {e}")
        return None
    return data if isinstance(data, dict) else None


def parse_embedded_json(text: str) -> Optional[dict]:
    """Stage 2: a JSON object is wrapped in surrounding prose or code fences."""
    match = _EMBEDDED_OBJECT.search(text or "")
    if not match:
        logger.debug("No embedded JSON object found in model output")
        return None
    return parse_strict_json(match.group(0))


def extract_flags(data: Any) -> Optional[List[BadReviewFlag]]:
    """
    Read the `badReviews` array from a parsed payload.

    Entries without an id are skipped.

    Returns:
        List of flags, or None if the payload has no `badReviews` array
    """
    if not isinstance(data, dict) or not isinstance(data.get("badReviews"), list):
        return None

    flags = []
    for item in data["badReviews"]:
        if not isinstance(item, dict) or item.get("id") is None:
            logger.warning(f"Skipping malformed badReviews entry: {item!r}")
            continue
        reason = item.get("reason")
        flags.append(BadReviewFlag(review_id=str(item["id"]), reason=str(reason) if reason else ""))
    return flags


def parse_detection_response(text: Optional[str]) -> Optional[List[BadReviewFlag]]:
    """
    Run the parse chain over model output.

    Args:
        text: Raw model output

    Returns:
        Parsed flags, or None when no stage produced a `badReviews` array
    """
    if not text:
        return None

    flags = extract_flags(parse_strict_json(text))
    if flags is not None:
        logger.debug(f"Parsed {len(flags)} flags with strict JSON")
        return flags

    flags = extract_flags(parse_embedded_json(text))
    if flags is not None:
        logger.info(f"Parsed {len(flags)} flags from embedded JSON object")
        return flags

    logger.warning("Model output did not contain a badReviews array")
    return None
