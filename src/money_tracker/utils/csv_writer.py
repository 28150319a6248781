"""CSV persistence for extracted transactions."""

import csv
import logging
import os
from datetime import datetime
from decimal import Decimal
from typing import List

from ..models.core import ClassifierConfig, ExtractedTransaction


logger = logging.getLogger(__name__)


class CSVWriter:
    """Writes and reads extracted transactions in a fixed CSV layout"""

    STANDARD_HEADERS = [
        'received_at',
        'amount',
        'is_expense',
        'bank',
        'account_type',
        'account_number',
        'transaction_time',
        'tag',
        'source_body'
    ]

    def __init__(self, config: ClassifierConfig):
        self.config = config

    def write_transactions(self, transactions: List[ExtractedTransaction], output_path: str) -> bool:
        """
        Write transactions to CSV file with standardized format

        Args:
            transactions: Transactions to write
            output_path: Path where CSV file should be written

        Returns:
            True if successful, False otherwise
        """
        if not transactions:
            return False

        try:
            output_dir = os.path.dirname(output_path)
            if output_dir:
                os.makedirs(output_dir, exist_ok=True)

            with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
                writer = csv.DictWriter(csvfile, fieldnames=self.STANDARD_HEADERS)
                writer.writeheader()
                for transaction in transactions:
                    writer.writerow(transaction.to_dict())

            logger.info(f"Wrote {len(transactions)} transactions to {output_path}")
            return True

        except (OSError, csv.Error) as e:
            logger.error(f"Failed to write {output_path}: {e}")
            return False

    def read_transactions(self, input_path: str) -> List[ExtractedTransaction]:
        """Load transactions previously written by ``write_transactions``

        Raises:
            OSError: If the file cannot be read
            ValueError: If a row cannot be converted back into a transaction
        """
        transactions = []

        with open(input_path, 'r', newline='', encoding='utf-8') as csvfile:
            reader = csv.DictReader(csvfile)
            for row_num, row in enumerate(reader, start=2):
                try:
                    transactions.append(self._row_to_transaction(row))
                except (KeyError, ArithmeticError, ValueError) as e:
                    raise ValueError(f"Row {row_num} of {input_path} is not a valid transaction: {e}") from e

        return transactions

    def _row_to_transaction(self, row) -> ExtractedTransaction:
        return ExtractedTransaction(
            amount=Decimal(row['amount']),
            is_expense=row['is_expense'] == 'True',
            bank=row['bank'],
            account_type=row['account_type'],
            account_number=row['account_number'],
            transaction_time=row['transaction_time'],
            tag=row['tag'],
            source_body=row['source_body'],
            received_at=datetime.fromisoformat(row['received_at']),
        )

    def generate_output_path(self, source_file_path: str) -> str:
        """Output path under the configured directory, named after the source file"""
        original_filename = os.path.basename(source_file_path)
        return os.path.join(self.config.output_directory, f"{original_filename}.csv")
