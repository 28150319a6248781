"""Data models and structures"""

from .core import (
    AccountInfo,
    BatchResult,
    ClassifierConfig,
    ExtractedTransaction,
    RawMessage,
    Rejected,
    RejectionReason,
)

__all__ = [
    'AccountInfo',
    'BatchResult',
    'ClassifierConfig',
    'ExtractedTransaction',
    'RawMessage',
    'Rejected',
    'RejectionReason',
]
