"""
Configuration settings for the review dashboard.

Centralized configuration for the store, the issue detection agent,
the HTTP API and logging.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Review store
REVIEWS_PATH = Path(os.getenv("REVIEWS_PATH", str(DATA_ROOT / "reviews.json")))

# API Configuration
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "").strip()

# Issue Detection Agent
ISSUE_DETECTION_MODEL = os.getenv("ISSUE_DETECTION_MODEL", "gemini-1.5-flash")
ISSUE_DETECTION_TIMEOUT_SECONDS = int(os.getenv("ISSUE_DETECTION_TIMEOUT_SECONDS", "15"))
ISSUE_DETECTION_MAX_RETRIES = int(os.getenv("ISSUE_DETECTION_MAX_RETRIES", "2"))
ISSUE_DETECTION_MAX_OUTPUT_TOKENS = 800

# Temperature settings (0.0 for deterministic)
LLM_TEMPERATURE = 0.0

# Heuristic fallback
ISSUE_KEYWORDS = (
    "dirty",
    "smell",
    "broken",
    "damage",
    "late",
    "rude",
    "noise",
    "cancel",
    "unreliable",
    "wifi",
    "smelly",
)
LOW_RATING_THRESHOLD = 2

# HTTP API
API_TITLE = "Review Dashboard API"
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "reviewboard.log"
