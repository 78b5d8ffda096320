"""
Issue Detection Agent.

Flags "bad" reviews (complaints, negative sentiment, problems that need
host attention) using an LLM, with a keyword/rating heuristic as the
deterministic fallback.
"""

import json
import logging
from typing import Iterable, List, Optional, Tuple

import google.generativeai as genai

import config.settings as settings
from reviewboard.agents.response_parser import BadReviewFlag, parse_detection_response
from reviewboard.models.issue import IssueReport
from reviewboard.models.review import Review

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are an assistant that detects "bad" guest reviews: complaints, negative sentiment, and issues that require host attention.

Rules:
- Only return valid JSON and nothing else (no explanation)
- Return a JSON object with key "badReviews" containing an array of {"id": <review id>, "reason": "<short reason>"}
- If uncertain, include the review but set reason to "unclear"
- Reviews with no problems must not be listed"""


def _construct_user_prompt(reviews: List[Review]) -> str:
    """Construct user prompt listing each review as {id, rating, text}."""
    items = [
        {
            "id": r.id,
            "rating": r.rating,
            "text": (r.public_review or "").replace("\n", " "),
        }
        for r in reviews
    ]
    return f"""Reviews:
{json.dumps(items, ensure_ascii=False)}

Return JSON:
{{
  "badReviews": [
    {{"id": 0, "reason": "..."}}
  ]
}}"""


class IssueDetectionAgent:
    """
    Detects reviews that need host attention.

    Uses Gemini when an API key is configured; every failure path
    (no key, API error, timeout, unparsable output) falls back to the
    heuristic so detection always returns a report.
    """

    def __init__(
        self,
        api_key: str = "",
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.0,
        max_retries: int = 2,
        timeout_seconds: int = 15,
        max_output_tokens: int = 800,
        keywords: Iterable[str] = (),
        low_rating_threshold: float = 2,
    ):
        """
        Initialize issue detection agent.

        Args:
            api_key: Gemini API key; empty disables the LLM path
            model_name: Gemini model to use
            temperature: LLM temperature (0.0 for deterministic)
            max_retries: Number of LLM attempts before falling back
            timeout_seconds: Per-request timeout
            max_output_tokens: Output token cap for the model
            keywords: Lower-case complaint keywords for the heuristic
            low_rating_threshold: Explicit ratings at or below this are flagged
        """
        self.model_name = model_name
        self.max_retries = max(1, max_retries)
        self.timeout_seconds = timeout_seconds
        self.keywords = tuple(k.lower() for k in keywords)
        self.low_rating_threshold = low_rating_threshold
        self.model = None

        if api_key:
            genai.configure(api_key=api_key)
            self.model = genai.GenerativeModel(
                model_name=model_name,
                generation_config={
                    "temperature": temperature,
                    "max_output_tokens": max_output_tokens,
                    "response_mime_type": "application/json",
                },
                system_instruction=SYSTEM_PROMPT,
            )
            logger.info(f"Initialized IssueDetectionAgent with model={model_name}, timeout={timeout_seconds}s")
        else:
            logger.info("Initialized IssueDetectionAgent in HEURISTIC mode (no API key)")

    @property
    def uses_llm(self) -> bool:
        return self.model is not None

    def detect(self, reviews: List[Review]) -> IssueReport:
        """
        Flag reviews that need attention.

        Args:
            reviews: Reviews to inspect

        Returns:
            IssueReport with source "ai" or "heuristic"
        """
        if not self.uses_llm:
            return self._heuristic_report(reviews)

        if not reviews:
            return IssueReport(source="ai", issues=[])

        flags, warning = self._ask_model(reviews)
        if flags is None:
            logger.warning(f"Falling back to heuristic issue detection: {warning}")
            return self._heuristic_report(reviews, warning=warning)

        reasons = {f.review_id: f.reason for f in flags}
        issues = []
        for review in reviews:
            key = str(review.id)
            if key in reasons:
                record = review.to_dict()
                record["aiReason"] = reasons[key]
                issues.append(record)

        logger.info(f"AI flagged {len(issues)} of {len(reviews)} reviews")
        return IssueReport(source="ai", issues=issues)

    def heuristic(self, reviews: List[Review]) -> List[Review]:
        """
        Keyword/rating heuristic.

        A review is flagged when its explicit rating is at or below the
        threshold, or its text contains any complaint keyword.
        """
        flagged = []
        for review in reviews:
            text = (review.public_review or "").lower()
            low_rating = review.rating is not None and review.rating <= self.low_rating_threshold
            if low_rating or any(k in text for k in self.keywords):
                flagged.append(review)
        return flagged

    def _heuristic_report(self, reviews: List[Review], warning: Optional[str] = None) -> IssueReport:
        flagged = self.heuristic(reviews)
        logger.info(f"Heuristic flagged {len(flagged)} of {len(reviews)} reviews")
        return IssueReport(
            source="heuristic",
            issues=[r.to_dict() for r in flagged],
            warning=warning,
        )

    def _ask_model(self, reviews: List[Review]) -> Tuple[Optional[List[BadReviewFlag]], Optional[str]]:
        """
        Call the model with retries.

        Returns:
            (flags, None) on success, or (None, warning) after the last attempt
        """
        user_prompt = _construct_user_prompt(reviews)
        warning = None

        for attempt in range(self.max_retries):
            try:
                response = self.model.generate_content(
                    user_prompt,
                    request_options={"timeout": self.timeout_seconds},
                )
                text = response.text
            except Exception as e:
                logger.error(f"LLM API error (attempt {attempt + 1}): {e}")
                warning = "AI request threw an error"
                continue

            if not text:
                logger.error(f"LLM returned no text (attempt {attempt + 1})")
                warning = "AI returned no text"
                continue

            flags = parse_detection_response(text)
            if flags is None:
                logger.error(f"Failed to parse LLM response (attempt {attempt + 1})")
                warning = "AI output not parsable"
                continue

            return flags, None

        return None, warning


def create_issue_agent() -> IssueDetectionAgent:
    """Build an IssueDetectionAgent from application settings."""
    return IssueDetectionAgent(
        api_key=settings.GEMINI_API_KEY,
        model_name=settings.ISSUE_DETECTION_MODEL,
        temperature=settings.LLM_TEMPERATURE,
        max_retries=settings.ISSUE_DETECTION_MAX_RETRIES,
        timeout_seconds=settings.ISSUE_DETECTION_TIMEOUT_SECONDS,
        max_output_tokens=settings.ISSUE_DETECTION_MAX_OUTPUT_TOKENS,
        keywords=settings.ISSUE_KEYWORDS,
        low_rating_threshold=settings.LOW_RATING_THRESHOLD,
    )
