"""Core data models for the SMS transaction classifier."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional


@dataclass(frozen=True)
class RawMessage:
    """A bank notification as delivered by the ingestion source.

    Attributes:
        body: Message text exactly as received
        received_at: Best-effort time the message arrived on the device
        sender: Optional sender address (e.g. "VM-HDFCBK"), informational only
    """
    body: str
    received_at: datetime
    sender: Optional[str] = None


class AccountInfo(NamedTuple):
    """Account type label and masked account digits found in a message."""
    account_type: Optional[str]
    account_number: Optional[str]


@dataclass(frozen=True)
class ExtractedTransaction:
    """Structured transaction produced from a single candidate message.

    Optional fields are empty strings when the corresponding stage found
    nothing. ``amount`` is always a non-negative magnitude, the direction
    lives in ``is_expense``.

    Attributes:
        amount: Transaction amount magnitude
        is_expense: True for debits, False for credits
        bank: Canonical bank name or empty
        account_type: Account type label or empty
        account_number: Trailing account digits or empty
        transaction_time: Date/time text found in the message or empty
        tag: Category label or empty
        source_body: Copy of the original message text
        received_at: Receipt time supplied by the ingestion source
    """
    amount: Decimal
    is_expense: bool
    bank: str
    account_type: str
    account_number: str
    transaction_time: str
    tag: str
    source_body: str
    received_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        """Amount with banking sign convention: expenses negative."""
        return -self.amount if self.is_expense else self.amount

    @property
    def display_time(self) -> str:
        """Embedded transaction time, falling back to the receipt time."""
        return self.transaction_time or self.received_at.strftime("%d-%m-%Y %H:%M")

    def to_dict(self) -> Dict[str, Any]:
        """Flat, serialisable representation used by the sinks and the CLI"""
        return {
            'received_at': self.received_at.isoformat(),
            'amount': str(self.amount),
            'is_expense': self.is_expense,
            'bank': self.bank,
            'account_type': self.account_type,
            'account_number': self.account_number,
            'transaction_time': self.transaction_time,
            'tag': self.tag,
            'source_body': self.source_body,
        }


class RejectionReason(Enum):
    """Why a message did not produce a transaction"""
    NO_CANDIDATE = "no_candidate"
    NO_AMOUNT = "no_amount"
    MALFORMED_NUMERIC = "malformed_numeric"


@dataclass(frozen=True)
class Rejected:
    """Non-exceptional outcome for a message that yields no record"""
    reason: RejectionReason
    body: str

    def __bool__(self) -> bool:
        return False


@dataclass
class BatchResult:
    """Result of classifying a batch of messages"""
    transactions: List[ExtractedTransaction] = field(default_factory=list)
    rejections: List[Rejected] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def total_messages(self) -> int:
        return len(self.transactions) + len(self.rejections)

    def rejection_counts(self) -> Dict[str, int]:
        """Count rejections per reason, every reason present with zero default"""
        counts = {reason.value: 0 for reason in RejectionReason}
        for rejection in self.rejections:
            counts[rejection.reason.value] += 1
        return counts


@dataclass
class ClassifierConfig:
    """Configuration for classifier behaviour.

    The extra tables extend the built-in lookup tables; their entries are
    always checked after the built-in ones.
    """
    output_directory: str = "data"
    extra_candidate_keywords: Optional[List[str]] = None
    extra_banks: Optional[Dict[str, str]] = None
    extra_merchant_keywords: Optional[Dict[str, str]] = None

    def __post_init__(self):
        if self.extra_candidate_keywords is None:
            self.extra_candidate_keywords = []
        if self.extra_banks is None:
            self.extra_banks = {}
        if self.extra_merchant_keywords is None:
            self.extra_merchant_keywords = {}
