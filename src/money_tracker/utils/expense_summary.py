"""Expense breakdown by category for a set of transactions."""

from collections import Counter, defaultdict
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from ..models.core import ExtractedTransaction


UNTAGGED = "Untagged"


@dataclass
class TagTotal:
    """Spending for one category"""
    tag: str
    amount: Decimal
    count: int
    percentage: Decimal


class ExpenseSummary:
    """Groups expenses by tag, largest spend first.

    Income records are ignored. Records without a tag are grouped under
    "Untagged". An optional ``(year, month)`` restricts the summary to
    transactions received in that month.
    """

    def __init__(self, transactions: Iterable[ExtractedTransaction], month: Optional[tuple] = None):
        self.expenses = [
            t for t in transactions
            if t.is_expense and (month is None or (t.received_at.year, t.received_at.month) == month)
        ]

    @property
    def total(self) -> Decimal:
        return sum((t.amount for t in self.expenses), Decimal('0'))

    def by_tag(self) -> List[TagTotal]:
        amounts: Dict[str, Decimal] = defaultdict(lambda: Decimal('0'))
        counts: Counter = Counter()

        for transaction in self.expenses:
            tag = transaction.tag or UNTAGGED
            amounts[tag] += transaction.amount
            counts[tag] += 1

        total = self.total
        rows = []
        for tag, amount in amounts.items():
            percentage = (amount / total * 100) if total else Decimal('0')
            rows.append(TagTotal(
                tag=tag,
                amount=amount,
                count=counts[tag],
                percentage=percentage.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP),
            ))

        # Stable sort keeps first-seen order for equal amounts
        rows.sort(key=lambda row: row.amount, reverse=True)
        return rows


def tag_usage(transactions: Iterable[ExtractedTransaction], limit: Optional[int] = None) -> List[str]:
    """Distinct non-empty tags, most frequently used first"""
    counts = Counter(t.tag for t in transactions if t.tag)
    return [tag for tag, _ in counts.most_common(limit)]
