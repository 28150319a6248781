"""Account type and masked account number extraction."""

import re
from typing import Optional

from ..models.core import AccountInfo
from .base import TextExtractor, contains_any, first_match


_MASK = r'(?:xx|x{2,}|\*{2,})'


class AccountInfoExtractor(TextExtractor):
    """Derives the account type label and the visible account digits.

    The two sub-extractions are independent; either may come back empty.
    Account numbers are captured with ``[0-9]`` so mask characters can never
    be part of the result.
    """

    # Ordered (keywords, label) rules, first case-insensitive containment wins.
    # "card" contains "ca", so card messages resolve to Current Account.
    ACCOUNT_TYPE_RULES = (
        (('sb', 'saving'), 'Savings Account'),
        (('ca', 'current'), 'Current Account'),
        (('card',), 'Card'),
        (('loan',), 'Loan Account'),
        (('fd',), 'Fixed Deposit'),
    )

    ACCOUNT_NUMBER_PATTERNS = (
        # "A/c no. XX1234", "account number 12345678", "card ending with 4321"
        re.compile(
            r'\b(?:a/c|ac|acct|account|card)\.?'
            r'(?:\s*(?:no\.?|number|ending))?(?:\s+with)?'
            r'\s*' + _MASK + r'?([0-9]{4,})',
            re.IGNORECASE,
        ),
        # Bare masked sequence: "XX1234", "****5678"
        re.compile(_MASK + r'([0-9]{4,})', re.IGNORECASE),
        # Type-prefixed sequence: "SB-XX1234", "card-5678"
        re.compile(r'\b(?:sb|ca|card|loan)-' + _MASK + r'?([0-9]{4,})', re.IGNORECASE),
    )

    def extract_account_type(self, body: str) -> Optional[str]:
        if not body:
            return None
        for keywords, label in self.ACCOUNT_TYPE_RULES:
            if contains_any(body, keywords):
                return label
        return None

    def extract_account_number(self, body: str) -> Optional[str]:
        if not body:
            return None
        match = first_match(self.ACCOUNT_NUMBER_PATTERNS, body)
        if match is None:
            return None
        return match.group(1)

    def extract_account_info(self, body: str) -> AccountInfo:
        """Return ``AccountInfo(account_type, account_number)``"""
        return AccountInfo(
            account_type=self.extract_account_type(body),
            account_number=self.extract_account_number(body),
        )

    def extract(self, body: str) -> AccountInfo:
        return self.extract_account_info(body)
