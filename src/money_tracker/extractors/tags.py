"""Best-guess spending category from keyword rules."""

from typing import List, Optional, Tuple

from ..models.core import ClassifierConfig
from .base import TextExtractor


class CategoryTagger(TextExtractor):
    """Assigns a spending category in two phases.

    Phase one checks merchant keywords in table order; phase two, only
    reached when no merchant matched, applies generic keyword rules in a
    fixed order. Matching is plain containment over the lower-cased body.
    """

    MERCHANT_KEYWORDS = (
        ('swiggy', 'Food'),
        ('zomato', 'Food'),
        ('uber', 'Transport'),
        ('ola', 'Transport'),
        ('amazon', 'Shopping'),
        ('flipkart', 'Shopping'),
        ('myntra', 'Shopping'),
        ('netflix', 'Entertainment'),
        ('hotstar', 'Entertainment'),
        ('prime', 'Entertainment'),
        ('spotify', 'Entertainment'),
        ('airtel', 'Bills'),
        ('jio', 'Bills'),
        ('vodafone', 'Bills'),
        ('electricity', 'Bills'),
        ('water', 'Bills'),
        ('gas', 'Bills'),
        ('rent', 'Housing'),
        ('salary', 'Income'),
        ('atm', 'Cash'),
        ('upi', 'Transfer'),
    )

    FALLBACK_RULES = (
        (('salary', 'credited'), 'Income'),
        (('atm', 'cash'), 'Cash'),
        (('rent', 'house'), 'Housing'),
        (('food', 'restaurant'), 'Food'),
        (('movie', 'theatre'), 'Entertainment'),
        (('petrol', 'fuel'), 'Transport'),
        (('medical', 'hospital'), 'Healthcare'),
        (('school', 'college'), 'Education'),
    )

    def __init__(self, config: Optional[ClassifierConfig] = None):
        super().__init__(config)
        self.merchant_keywords: List[Tuple[str, str]] = list(self.MERCHANT_KEYWORDS)
        for keyword, tag in self.config.extra_merchant_keywords.items():
            self.merchant_keywords.append((keyword.lower(), tag))

    @property
    def known_tags(self) -> List[str]:
        """All category labels this tagger can produce, in first-seen order"""
        tags = [tag for _, tag in self.merchant_keywords]
        tags.extend(tag for _, tag in self.FALLBACK_RULES)
        return list(dict.fromkeys(tags))

    def extract_tag(self, body: str) -> Optional[str]:
        if not body:
            return None

        lowered = body.lower()

        for keyword, tag in self.merchant_keywords:
            if keyword in lowered:
                return tag

        for keywords, tag in self.FALLBACK_RULES:
            if any(keyword in lowered for keyword in keywords):
                return tag

        return None

    def extract(self, body: str) -> Optional[str]:
        return self.extract_tag(body)
