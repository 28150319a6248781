"""Debit/credit direction of a transaction message."""

from .base import TextExtractor, contains_any


class DirectionClassifier(TextExtractor):
    """Classifies messages as expense (debit) or income (credit).

    Any expense keyword makes the message an expense, whatever else it says;
    everything else is treated as income.
    """

    EXPENSE_KEYWORDS = ('debited', 'spent', 'withdrawal')

    def is_expense(self, body: str) -> bool:
        if not body:
            return False
        return contains_any(body, self.EXPENSE_KEYWORDS)

    def extract(self, body: str) -> bool:
        return self.is_expense(body)
