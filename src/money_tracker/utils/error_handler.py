"""Error handling and structured logging for batch classification."""

import json
import logging
import sys
import traceback
from collections import Counter
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..models.core import Rejected, RejectionReason


class ErrorSeverity(Enum):
    """Error severity levels"""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification"""
    FILE_ACCESS = "file_access"
    MESSAGE_FILTER = "message_filter"
    AMOUNT_PARSING = "amount_parsing"
    DATA_VALIDATION = "data_validation"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


ERROR_CODES = {
    # File access errors
    "FILE_NOT_FOUND": "F001",
    "FILE_PERMISSION_DENIED": "F002",
    "ENCODING_ERROR": "F003",
    "OUTPUT_WRITE_ERROR": "F004",

    # Message outcomes
    "NO_CANDIDATE": "M001",
    "NO_AMOUNT": "M002",
    "MALFORMED_NUMERIC": "M003",
    "MALFORMED_INPUT_LINE": "M004",

    # Record validation
    "INVALID_RECORD": "V001",

    # Configuration errors
    "INVALID_CONFIG_FORMAT": "C001",
    "INVALID_CONFIG_VALUE": "C002",

    "UNEXPECTED_ERROR": "S999"
}

_REJECTION_CATEGORIES = {
    RejectionReason.NO_CANDIDATE: ErrorCategory.MESSAGE_FILTER,
    RejectionReason.NO_AMOUNT: ErrorCategory.AMOUNT_PARSING,
    RejectionReason.MALFORMED_NUMERIC: ErrorCategory.AMOUNT_PARSING,
}


@dataclass
class ErrorDetail:
    """Detailed error information"""
    timestamp: str
    severity: str
    category: str
    error_code: str
    message: str
    file_path: Optional[str] = None
    line_number: Optional[int] = None
    raw_value: Optional[str] = None
    stack_trace: Optional[str] = None
    context: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


class JSONFormatter(logging.Formatter):
    """One JSON object per log record"""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        for extra_field in ('error_code', 'file_path', 'category', 'context'):
            if hasattr(record, extra_field):
                log_entry[extra_field] = getattr(record, extra_field)

        return json.dumps(log_entry, default=str)


class ErrorHandler:
    """Collects errors, warnings and rejections for a processing run.

    Messages that are not bank transactions are expected and recorded only
    as counts and DEBUG log lines. Errors and warnings are kept as
    ``ErrorDetail`` entries and, when a log directory is given, written as
    JSON lines.
    """

    def __init__(self, log_directory: Optional[str] = None, enable_console: bool = False):
        self.log_directory = Path(log_directory) if log_directory else None

        self.errors: List[ErrorDetail] = []
        self.warnings: List[ErrorDetail] = []
        self.rejections: Counter = Counter()

        self._setup_logging(enable_console)

    def _setup_logging(self, enable_console: bool):
        self.logger = logging.getLogger('money_tracker.processing')
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()

        if self.log_directory is not None:
            self.log_directory.mkdir(parents=True, exist_ok=True)
            log_file = self.log_directory / f"classifier_{datetime.now().strftime('%Y%m%d')}.jsonl"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(JSONFormatter())
            self.logger.addHandler(file_handler)

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
            self.logger.addHandler(console_handler)

    def close(self):
        """Release file handlers opened for the log directory"""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def log_error(self,
                  message: str,
                  error_type: str,
                  category: ErrorCategory = ErrorCategory.SYSTEM,
                  file_path: Optional[str] = None,
                  line_number: Optional[int] = None,
                  raw_value: Optional[str] = None,
                  exception: Optional[Exception] = None,
                  context: Optional[Dict[str, Any]] = None) -> ErrorDetail:
        """Log an error with detailed information"""
        error_code = ERROR_CODES.get(error_type, "S999")
        stack_trace = None

        if exception:
            stack_trace = ''.join(traceback.format_exception(
                type(exception), exception, exception.__traceback__
            ))

        error_detail = ErrorDetail(
            timestamp=datetime.now().isoformat(),
            severity=ErrorSeverity.ERROR.value,
            category=category.value,
            error_code=error_code,
            message=message,
            file_path=file_path,
            line_number=line_number,
            raw_value=raw_value,
            stack_trace=stack_trace,
            context=context or {}
        )
        self.errors.append(error_detail)

        self.logger.error(
            message,
            extra={
                'error_code': error_code,
                'category': category.value,
                'file_path': file_path,
                'context': context or {}
            }
        )
        return error_detail

    def log_warning(self,
                    message: str,
                    warning_type: str,
                    category: ErrorCategory = ErrorCategory.SYSTEM,
                    file_path: Optional[str] = None,
                    line_number: Optional[int] = None,
                    context: Optional[Dict[str, Any]] = None) -> ErrorDetail:
        """Log a warning with detailed information"""
        warning_code = ERROR_CODES.get(warning_type, "W999")

        warning_detail = ErrorDetail(
            timestamp=datetime.now().isoformat(),
            severity=ErrorSeverity.WARNING.value,
            category=category.value,
            error_code=warning_code,
            message=message,
            file_path=file_path,
            line_number=line_number,
            context=context or {}
        )
        self.warnings.append(warning_detail)

        self.logger.warning(
            message,
            extra={
                'error_code': warning_code,
                'category': category.value,
                'file_path': file_path,
                'context': context or {}
            }
        )
        return warning_detail

    def log_info(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra={'context': context or {}})

    def record_rejection(self, rejection: Rejected, file_path: Optional[str] = None):
        """Count a rejected message; never recorded as an error"""
        self.rejections[rejection.reason.value] += 1
        self.logger.debug(
            f"Rejected message ({rejection.reason.value}): {rejection.body[:60]!r}",
            extra={
                'error_code': ERROR_CODES[rejection.reason.name],
                'category': _REJECTION_CATEGORIES[rejection.reason].value,
                'file_path': file_path
            }
        )

    def get_error_summary(self) -> Dict[str, Any]:
        """Get summary of all errors, warnings and rejections"""
        return {
            'total_errors': len(self.errors),
            'total_warnings': len(self.warnings),
            'errors_by_category': dict(Counter(e.category for e in self.errors)),
            'warnings_by_category': dict(Counter(w.category for w in self.warnings)),
            'rejections': dict(self.rejections),
            'most_common_errors': self._get_most_common_errors()
        }

    def _get_most_common_errors(self, limit: int = 5) -> List[Dict[str, Any]]:
        counts = Counter((e.error_code, e.message) for e in self.errors)
        return [
            {'error_code': code, 'message': message, 'count': count}
            for (code, message), count in counts.most_common(limit)
        ]

    def generate_error_report(self, output_file: str) -> str:
        """Write the summary plus every error and warning as JSON"""
        report = {
            'report_timestamp': datetime.now().isoformat(),
            'summary': self.get_error_summary(),
            'all_errors': [error.to_dict() for error in self.errors],
            'all_warnings': [warning.to_dict() for warning in self.warnings]
        }

        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, default=str)

        self.log_info(f"Error report generated: {output_file}")
        return output_file

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def clear_errors(self):
        """Clear all accumulated errors, warnings and rejection counts"""
        self.errors.clear()
        self.warnings.clear()
        self.rejections.clear()
