"""Gate deciding whether a message is a candidate bank transaction."""

from typing import List, Optional

from ..models.core import ClassifierConfig
from .base import TextExtractor, contains_any


class MessageFilter(TextExtractor):
    """Keyword gate for bank transaction messages"""

    CANDIDATE_KEYWORDS = (
        'debited', 'credited', 'spent', 'transaction', 'payment',
        'withdrawal', 'Rs.', 'INR'
    )

    def __init__(self, config: Optional[ClassifierConfig] = None):
        super().__init__(config)
        self.keywords: List[str] = list(self.CANDIDATE_KEYWORDS)
        self.keywords.extend(self.config.extra_candidate_keywords)

    def is_candidate(self, body: str) -> bool:
        """True when the body contains at least one candidate keyword"""
        if not body:
            return False
        return contains_any(body, self.keywords)

    def extract(self, body: str) -> bool:
        return self.is_candidate(body)
