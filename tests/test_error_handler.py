"""Tests for error handling and structured logging."""

import json
import os
import shutil
import tempfile
import unittest

from money_tracker.models.core import Rejected, RejectionReason
from money_tracker.utils.error_handler import ErrorCategory, ErrorHandler


class TestErrorHandler(unittest.TestCase):
    """Test cases for ErrorHandler"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.handler = ErrorHandler(log_directory=self.temp_dir)

    def tearDown(self):
        self.handler.close()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_rejections_are_not_errors(self):
        self.handler.record_rejection(Rejected(RejectionReason.NO_CANDIDATE, "Your OTP is 1234"))
        self.handler.record_rejection(Rejected(RejectionReason.NO_CANDIDATE, "Hello"))
        self.handler.record_rejection(Rejected(RejectionReason.NO_AMOUNT, "debited"))

        self.assertFalse(self.handler.has_errors())
        self.assertFalse(self.handler.has_warnings())
        self.assertEqual(
            self.handler.get_error_summary()['rejections'],
            {'no_candidate': 2, 'no_amount': 1}
        )

    def test_log_error_and_warning(self):
        try:
            raise OSError("disk full")
        except OSError as e:
            detail = self.handler.log_error(
                "Failed to write output file out.csv",
                "OUTPUT_WRITE_ERROR",
                ErrorCategory.FILE_ACCESS,
                file_path="out.csv",
                exception=e
            )
        self.handler.log_warning("Message 3: Unknown tag: 'Misc'", "INVALID_RECORD", ErrorCategory.DATA_VALIDATION)

        self.assertEqual(detail.error_code, "F004")
        self.assertIn("disk full", detail.stack_trace)
        self.assertTrue(self.handler.has_errors())
        self.assertTrue(self.handler.has_warnings())

        summary = self.handler.get_error_summary()
        self.assertEqual(summary['errors_by_category'], {'file_access': 1})
        self.assertEqual(summary['warnings_by_category'], {'data_validation': 1})
        self.assertEqual(summary['most_common_errors'][0]['error_code'], "F004")

    def test_unknown_error_type(self):
        detail = self.handler.log_error("boom", "SOMETHING_ELSE")
        self.assertEqual(detail.error_code, "S999")
        self.assertEqual(detail.category, "system")

    def test_json_log_file(self):
        self.handler.log_warning("Skipping line 2: expected a JSON object", "MALFORMED_INPUT_LINE",
                                 ErrorCategory.FILE_ACCESS, file_path="in.jsonl", line_number=2)
        self.handler.close()

        log_files = [name for name in os.listdir(self.temp_dir) if name.endswith('.jsonl')]
        self.assertEqual(len(log_files), 1)
        self.assertTrue(log_files[0].startswith('classifier_'))

        with open(os.path.join(self.temp_dir, log_files[0]), encoding='utf-8') as f:
            entries = [json.loads(line) for line in f if line.strip()]

        self.assertEqual(entries[-1]['level'], 'WARNING')
        self.assertEqual(entries[-1]['error_code'], 'M004')
        self.assertEqual(entries[-1]['file_path'], 'in.jsonl')

    def test_error_report(self):
        self.handler.log_error("boom", "UNEXPECTED_ERROR")
        self.handler.record_rejection(Rejected(RejectionReason.MALFORMED_NUMERIC, "Rs. ,, debited"))
        report_path = os.path.join(self.temp_dir, 'report.json')

        self.handler.generate_error_report(report_path)

        with open(report_path, encoding='utf-8') as f:
            report = json.load(f)
        self.assertEqual(report['summary']['total_errors'], 1)
        self.assertEqual(report['summary']['rejections'], {'malformed_numeric': 1})
        self.assertEqual(report['all_errors'][0]['message'], "boom")
        self.assertEqual(report['all_warnings'], [])

    def test_clear_errors(self):
        self.handler.log_error("boom", "UNEXPECTED_ERROR")
        self.handler.record_rejection(Rejected(RejectionReason.NO_AMOUNT, "debited"))

        self.handler.clear_errors()

        self.assertFalse(self.handler.has_errors())
        self.assertEqual(self.handler.get_error_summary()['rejections'], {})


if __name__ == '__main__':
    unittest.main()
