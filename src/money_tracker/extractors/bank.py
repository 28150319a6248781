"""Issuing bank identification."""

import logging
import re
from typing import List, Optional, Tuple

from ..models.core import ClassifierConfig
from .base import TextExtractor


logger = logging.getLogger(__name__)


class BankIdentifier(TextExtractor):
    """Maps message content to a canonical bank name.

    The table is checked top to bottom and the first entry whose code or
    name is found wins, so its order is the tie-break when a message
    mentions more than one bank. Entries from configuration are appended
    after the built-in ones.
    """

    BANK_CODES = (
        ('SBI', 'State Bank of India'),
        ('HDFC', 'HDFC Bank'),
        ('ICICI', 'ICICI Bank'),
        ('AXIS', 'Axis Bank'),
        ('PNB', 'Punjab National Bank'),
        ('BOB', 'Bank of Baroda'),
        ('CANARA', 'Canara Bank'),
        ('IDBI', 'IDBI Bank'),
        ('KOTAK', 'Kotak Mahindra Bank'),
        ('YES', 'Yes Bank'),
        ('IndusInd', 'IndusInd Bank'),
        ('INDIAN', 'Indian Bank'),
        ('IOB', 'Indian Overseas Bank'),
    )

    def __init__(self, config: Optional[ClassifierConfig] = None):
        super().__init__(config)
        self.banks: List[Tuple[str, str]] = list(self.BANK_CODES)
        known_codes = {code.lower() for code, _ in self.banks}
        for code, name in self.config.extra_banks.items():
            if code.lower() in known_codes:
                logger.warning(f"Ignoring configured bank code {code!r}: already in the built-in table")
                continue
            self.banks.append((code, name))
            known_codes.add(code.lower())
        self._standalone_codes = {
            code: re.compile(r'\b' + re.escape(code.upper()) + r'\b')
            for code, _ in self.banks
        }

    @property
    def canonical_names(self) -> List[str]:
        return [name for _, name in self.banks]

    def identify_bank(self, body: str) -> Optional[str]:
        """Return the canonical bank name, or None when no entry matches.

        The code and name conditions are checked over the whole table first.
        Only when none of them matches is a standalone upper-case code
        (e.g. "XX1234 SBI on") accepted, again in table order.
        """
        if not body:
            return None

        lowered = body.lower()
        for code, name in self.banks:
            if self._matches(lowered, code, name):
                return name

        for code, name in self.banks:
            if self._standalone_codes[code].search(body):
                return name
        return None

    def _matches(self, lowered: str, code: str, name: str) -> bool:
        code_lower = code.lower()
        name_lower = name.lower()
        return (
            f"{code_lower}." in lowered
            or lowered.endswith(code_lower)
            or lowered.endswith(name_lower)
            or name_lower in lowered
        )

    def extract(self, body: str) -> Optional[str]:
        return self.identify_bank(body)
