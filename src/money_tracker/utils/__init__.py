"""Utility functions and helpers"""

from .validation import ValidationEngine
from .csv_writer import CSVWriter
from .config_manager import ConfigManager
from .error_handler import ErrorHandler, ErrorCategory, ErrorSeverity
from .expense_summary import ExpenseSummary, TagTotal, tag_usage

__all__ = [
    'ValidationEngine',
    'CSVWriter',
    'ConfigManager',
    'ErrorHandler',
    'ErrorCategory',
    'ErrorSeverity',
    'ExpenseSummary',
    'TagTotal',
    'tag_usage'
]
