"""Bank SMS to structured transaction classifier"""

__version__ = "0.1.0"

from .classifier import SmsTransactionClassifier, classify
from .models.core import (
    ClassifierConfig,
    ExtractedTransaction,
    RawMessage,
    Rejected,
    RejectionReason,
)

__all__ = [
    '__version__',
    'SmsTransactionClassifier',
    'classify',
    'ClassifierConfig',
    'ExtractedTransaction',
    'RawMessage',
    'Rejected',
    'RejectionReason',
]
