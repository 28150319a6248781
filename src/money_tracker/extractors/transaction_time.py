"""Transaction date/time embedded in the message text."""

import re
from typing import Optional

from .base import TextExtractor


_TIME = r'([0-9]{1,2}:[0-9]{1,2}(?::[0-9]{1,2})?)'


class TransactionTimeExtractor(TextExtractor):
    """Finds the date/time text a bank embeds in its message.

    The result is returned as written in the message: bank formats vary too
    much to normalise into a timestamp. Callers fall back to the receipt time
    when nothing is found.
    """

    DATE_TIME_PATTERNS = (
        # 05-06-2024 14:30
        re.compile(r'([0-9]{1,2}-[0-9]{1,2}-[0-9]{2,4})\s+' + _TIME),
        # 05/06/2024 14:30:15
        re.compile(r'([0-9]{1,2}/[0-9]{1,2}/[0-9]{2,4})\s+' + _TIME),
        # 5 Jun 2024 at 14:30
        re.compile(r'([0-9]{1,2}\s+[a-zA-Z]{3}\s+[0-9]{2,4})(?:\s+at\s+|\s+)' + _TIME, re.IGNORECASE),
        # 05-Jun-24, date only
        re.compile(r'([0-9]{1,2}-[a-zA-Z]{3}-[0-9]{2,4})', re.IGNORECASE),
    )

    def extract_transaction_time(self, body: str) -> Optional[str]:
        if not body:
            return None

        for pattern in self.DATE_TIME_PATTERNS:
            match = pattern.search(body)
            if match:
                return ' '.join(group for group in match.groups() if group)
        return None

    def extract(self, body: str) -> Optional[str]:
        return self.extract_transaction_time(body)
