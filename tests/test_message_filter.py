"""Tests for the candidate message filter."""

import pytest

from money_tracker.extractors.message_filter import MessageFilter
from money_tracker.models.core import ClassifierConfig


class TestMessageFilter:
    """Test cases for MessageFilter"""

    def setup_method(self):
        self.message_filter = MessageFilter()

    @pytest.mark.parametrize("body", [
        "Your a/c is DEBITED for 500",
        "Amount credited to your account",
        "You have spent 200 at a store",
        "Transaction alert for your card",
        "Payment received, thank you",
        "ATM withdrawal of 1000",
        "Rs.500 on your card",
        "INR 500 on your card",
    ])
    def test_candidate_keywords(self, body):
        assert self.message_filter.is_candidate(body)

    def test_currency_markers_are_case_insensitive(self):
        assert self.message_filter.is_candidate("rs. 500 at store")
        assert self.message_filter.is_candidate("inr 500 at store")

    def test_non_candidates(self):
        assert not self.message_filter.is_candidate("Hello, how are you?")
        assert not self.message_filter.is_candidate("Your OTP is 123456")

    def test_empty_body(self):
        assert not self.message_filter.is_candidate("")

    def test_extra_keywords_from_config(self):
        config = ClassifierConfig(extra_candidate_keywords=["received"])
        message_filter = MessageFilter(config)

        assert message_filter.is_candidate("You have received 100")
        assert not self.message_filter.is_candidate("You have received 100")
