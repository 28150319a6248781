"""Abstract base class and shared helpers for message extractors."""

import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Pattern

from ..models.core import ClassifierConfig


class TextExtractor(ABC):
    """Abstract base class for all extraction stages.

    Every stage is a pure function of the message body: no stage keeps
    per-message state or depends on another stage's output.
    """

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self.config = config or ClassifierConfig()

    @abstractmethod
    def extract(self, body: str) -> Any:
        """Run the stage against a message body"""
        pass


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive containment test for any of the keywords"""
    lowered = text.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def first_match(patterns: Iterable[Pattern], text: str) -> Optional[re.Match]:
    """Return the first successful search over an ordered list of patterns"""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match
    return None
