"""Validation engine for extracted transactions and CSV output."""

import csv
import os
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from ..models.core import ExtractedTransaction


ACCOUNT_NUMBER_RE = re.compile(r'^[0-9]+$')


class ValidationEngine:
    """Checks extracted records against the record invariants"""

    CSV_HEADERS = [
        'received_at', 'amount', 'is_expense', 'bank', 'account_type',
        'account_number', 'transaction_time', 'tag', 'source_body'
    ]

    def __init__(self,
                 known_banks: Optional[Iterable[str]] = None,
                 known_tags: Optional[Iterable[str]] = None):
        self.known_banks = set(known_banks) if known_banks is not None else None
        self.known_tags = set(known_tags) if known_tags is not None else None

    def validate_transaction(self, transaction: ExtractedTransaction) -> List[str]:
        """Validate individual transaction and return list of errors"""
        errors = []

        if not isinstance(transaction.amount, Decimal):
            errors.append("Invalid amount: must be Decimal object")
        elif transaction.amount < 0:
            errors.append("Invalid amount: must be non-negative")
        elif transaction.amount == 0:
            errors.append("Warning: Transaction amount is zero")

        if transaction.account_number and not ACCOUNT_NUMBER_RE.match(transaction.account_number):
            errors.append(f"Account number must contain digits only: {transaction.account_number!r}")

        if transaction.bank and self.known_banks is not None and transaction.bank not in self.known_banks:
            errors.append(f"Unknown bank: {transaction.bank!r}")

        if transaction.tag and self.known_tags is not None and transaction.tag not in self.known_tags:
            errors.append(f"Unknown tag: {transaction.tag!r}")

        if not transaction.source_body or not transaction.source_body.strip():
            errors.append("Source body cannot be empty")

        return errors

    def validate_transaction_list(self, transactions: List[ExtractedTransaction]) -> Dict[str, Any]:
        """Validate a list of transactions and return summary"""
        valid_count = 0
        all_errors = []
        all_warnings = []

        for i, transaction in enumerate(transactions):
            problems = self.validate_transaction(transaction)
            transaction_errors = [p for p in problems if not p.startswith('Warning:')]
            transaction_warnings = [p for p in problems if p.startswith('Warning:')]

            all_errors.extend(f"Transaction {i+1}: {error}" for error in transaction_errors)
            all_warnings.extend(f"Transaction {i+1}: {warning}" for warning in transaction_warnings)

            # Warnings alone do not make a record invalid
            if not transaction_errors:
                valid_count += 1

        return {
            'valid_count': valid_count,
            'invalid_count': len(transactions) - valid_count,
            'total_count': len(transactions),
            'errors': all_errors,
            'warnings': all_warnings
        }

    def validate_csv_output(self, csv_path: str) -> List[str]:
        """Validate generated CSV file for data integrity"""
        errors = []

        if not os.path.exists(csv_path):
            return [f"CSV file does not exist: {csv_path}"]

        try:
            with open(csv_path, 'r', newline='', encoding='utf-8') as file:
                reader = csv.DictReader(file)

                if not reader.fieldnames:
                    return ["CSV file has no headers"]

                if list(reader.fieldnames) != self.CSV_HEADERS:
                    errors.append(f"Invalid CSV headers. Expected: {self.CSV_HEADERS}, Got: {list(reader.fieldnames)}")

                for row_num, row in enumerate(reader, start=2):  # header is row 1
                    errors.extend(self._validate_csv_row(row, row_num))
                    if len(errors) > 100:
                        errors.append("Too many errors, stopping validation")
                        break

        except UnicodeDecodeError:
            errors.append(f"CSV file encoding error: {csv_path}")
        except csv.Error as e:
            errors.append(f"CSV format error: {str(e)}")

        return errors

    def _validate_csv_row(self, row: Dict[str, str], row_num: int) -> List[str]:
        errors = []

        amount_str = (row.get('amount') or '').strip()
        try:
            if Decimal(amount_str) < 0:
                errors.append(f"Row {row_num}: Amount must be non-negative: {amount_str}")
        except InvalidOperation:
            errors.append(f"Row {row_num}: Invalid amount format '{amount_str}'")

        if row.get('is_expense') not in ('True', 'False'):
            errors.append(f"Row {row_num}: is_expense must be True or False")

        account_number = (row.get('account_number') or '').strip()
        if account_number and not ACCOUNT_NUMBER_RE.match(account_number):
            errors.append(f"Row {row_num}: Account number must contain digits only")

        if not (row.get('source_body') or '').strip():
            errors.append(f"Row {row_num}: source_body cannot be empty")

        return errors
