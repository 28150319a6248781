"""Tests for the per-tag expense summary."""

from datetime import datetime
from decimal import Decimal

from money_tracker.models.core import ExtractedTransaction
from money_tracker.utils.expense_summary import UNTAGGED, ExpenseSummary, tag_usage


def transaction(amount, tag, is_expense=True, received_at=datetime(2024, 6, 5, 12, 0)):
    return ExtractedTransaction(
        amount=Decimal(amount),
        is_expense=is_expense,
        bank="",
        account_type="",
        account_number="",
        transaction_time="",
        tag=tag,
        source_body=f"Rs.{amount} {tag}",
        received_at=received_at,
    )


class TestExpenseSummary:

    def setup_method(self):
        self.transactions = [
            transaction("100", "Food"),
            transaction("300", "Shopping"),
            transaction("50", "Food"),
            transaction("50", ""),
            transaction("5000", "Income", is_expense=False),
            transaction("999", "Food", received_at=datetime(2024, 5, 31, 23, 59)),
        ]

    def test_income_is_ignored(self):
        summary = ExpenseSummary(self.transactions)
        assert summary.total == Decimal("1499")
        assert "Income" not in [row.tag for row in summary.by_tag()]

    def test_grouping_and_order(self):
        rows = ExpenseSummary(self.transactions, month=(2024, 6)).by_tag()

        assert [row.tag for row in rows] == ["Shopping", "Food", UNTAGGED]
        assert rows[0].amount == Decimal("300")
        assert rows[1].amount == Decimal("150")
        assert rows[1].count == 2

    def test_percentages(self):
        rows = ExpenseSummary(self.transactions, month=(2024, 6)).by_tag()

        assert [row.percentage for row in rows] == [Decimal("60.0"), Decimal("30.0"), Decimal("10.0")]

    def test_month_filter(self):
        summary = ExpenseSummary(self.transactions, month=(2024, 5))
        assert summary.total == Decimal("999")
        assert len(summary.by_tag()) == 1

    def test_no_expenses(self):
        summary = ExpenseSummary([transaction("10", "Income", is_expense=False)])
        assert summary.total == Decimal("0")
        assert summary.by_tag() == []


def test_tag_usage_orders_by_frequency():
    transactions = [
        transaction("1", "Food"),
        transaction("1", "Transport"),
        transaction("1", "Food"),
        transaction("1", ""),
    ]
    assert tag_usage(transactions) == ["Food", "Transport"]
    assert tag_usage(transactions, limit=1) == ["Food"]
