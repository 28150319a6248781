"""Extraction stages for bank notification messages"""

from .base import TextExtractor
from .message_filter import MessageFilter
from .amount import AmountExtractor
from .direction import DirectionClassifier
from .bank import BankIdentifier
from .account import AccountInfoExtractor
from .transaction_time import TransactionTimeExtractor
from .tags import CategoryTagger

__all__ = [
    'TextExtractor',
    'MessageFilter',
    'AmountExtractor',
    'DirectionClassifier',
    'BankIdentifier',
    'AccountInfoExtractor',
    'TransactionTimeExtractor',
    'CategoryTagger',
]
