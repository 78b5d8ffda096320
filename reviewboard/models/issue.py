"""
Issue report data model.

Output of the Issue Detection Agent.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class IssueReport:
    """
    Reviews flagged as needing host attention.

    `issues` holds review records in wire form; when `source` is "ai"
    each carries an `aiReason` key.
    """
    source: str  # "ai" or "heuristic"
    issues: List[dict] = field(default_factory=list)
    warning: Optional[str] = None

    def __post_init__(self):
        if self.source not in ("ai", "heuristic"):
            raise ValueError(f"Invalid source: {self.source}. Must be 'ai' or 'heuristic'")

    def to_dict(self) -> dict:
        data = {"source": self.source, "issues": self.issues}
        if self.warning:
            data["warning"] = self.warning
        return data
