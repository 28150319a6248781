"""Monetary amount extraction from bank messages."""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple

from .base import TextExtractor


logger = logging.getLogger(__name__)


# Currency marker, case-sensitive: "Rs", "Rs." or "INR"
_CURRENCY = r'(?:Rs\.?|INR)\s*'


class AmountExtractor(TextExtractor):
    """Locates the first currency-marked amount in a message.

    Patterns are tried in order and the first one that matches anywhere in
    the text decides the outcome, including when its capture fails to parse.
    """

    AMOUNT_PATTERNS = (
        # Comma-grouped number with optional two-digit fraction
        re.compile(_CURRENCY + r'([0-9]+(?:,[0-9]+)*(?:\.[0-9]{2})?)'),
        # Comma-grouped number with mandatory two-digit fraction
        re.compile(_CURRENCY + r'([0-9,]+\.[0-9]{2})'),
        # Comma-grouped integer
        re.compile(_CURRENCY + r'([0-9,]+)'),
    )

    def extract_amount(self, body: str) -> Optional[Decimal]:
        """Return the amount as a Decimal, or None when no amount is found"""
        amount, _ = self.match_amount(body)
        return amount

    def match_amount(self, body: str) -> Tuple[Optional[Decimal], Optional[str]]:
        """Return ``(amount, raw_text)`` for the first matching pattern.

        ``raw_text`` is set whenever a pattern matched; ``amount`` is None
        when nothing matched or the matched text is not numeric.
        """
        if not body:
            return None, None

        for pattern in self.AMOUNT_PATTERNS:
            match = pattern.search(body)
            if match:
                raw = match.group(1)
                return self._parse(raw), raw

        return None, None

    def _parse(self, raw: str) -> Optional[Decimal]:
        cleaned = raw.replace(',', '')
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            logger.debug(f"Matched amount text is not numeric: {raw!r}")
            return None
        if not amount.is_finite() or amount < 0:
            return None
        return amount

    def extract(self, body: str) -> Optional[Decimal]:
        return self.extract_amount(body)
