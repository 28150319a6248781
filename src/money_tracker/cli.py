"""Command-line interface for the SMS transaction classifier."""

import json
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

import click

from .classifier import SmsTransactionClassifier
from .models.core import BatchResult, RawMessage, Rejected
from .utils.config_manager import ConfigManager
from .utils.csv_writer import CSVWriter
from .utils.error_handler import ErrorCategory, ErrorHandler
from .utils.expense_summary import ExpenseSummary, tag_usage
from .utils.validation import ValidationEngine


# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class MoneyTrackerCLI:
    """Main CLI class wiring configuration, classifier and sinks"""

    def __init__(self, config_path: Optional[str] = None, log_directory: Optional[str] = None):
        self.config_manager = ConfigManager(config_path)
        self.config = self.config_manager.load_config()
        self.error_handler = ErrorHandler(log_directory=log_directory)

        self.classifier = SmsTransactionClassifier(self.config)
        self.csv_writer = CSVWriter(self.config)
        self.validation_engine = ValidationEngine()

    def read_messages(self, input_path: str, jsonl: bool = False) -> List[RawMessage]:
        """Read raw messages from a text file (one per line) or JSON lines.

        Blank lines are skipped. JSON lines that cannot be decoded or lack a
        ``body`` are logged as warnings and skipped.
        """
        received_default = datetime.fromtimestamp(os.path.getmtime(input_path))
        messages = []

        with open(input_path, 'r', encoding='utf-8') as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                if not jsonl:
                    messages.append(RawMessage(body=line, received_at=received_default))
                    continue

                try:
                    messages.append(self._parse_json_line(line, received_default))
                except (ValueError, TypeError, KeyError) as e:
                    self.error_handler.log_warning(
                        f"Skipping line {line_number}: {e}",
                        "MALFORMED_INPUT_LINE",
                        ErrorCategory.FILE_ACCESS,
                        file_path=input_path,
                        line_number=line_number
                    )

        logger.debug(f"Read {len(messages)} messages from {input_path}")
        return messages

    def _parse_json_line(self, line: str, received_default: datetime) -> RawMessage:
        data = json.loads(line)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        body = data['body']
        if not isinstance(body, str):
            raise TypeError("body must be a string")

        received_at = received_default
        if data.get('received_at'):
            received_at = datetime.fromisoformat(data['received_at'])

        return RawMessage(body=body, received_at=received_at, sender=data.get('sender'))

    def ingest(self, input_path: str, output_path: Optional[str] = None, jsonl: bool = False) -> Dict[str, Any]:
        """Classify every message in a file and write the transactions as CSV"""
        messages = self.read_messages(input_path, jsonl=jsonl)
        batch = self.classifier.classify_batch(messages)

        for rejection in batch.rejections:
            self.error_handler.record_rejection(rejection, file_path=input_path)
        for warning in batch.warnings:
            self.error_handler.log_warning(
                warning, "INVALID_RECORD", ErrorCategory.DATA_VALIDATION, file_path=input_path
            )

        output_file = ""
        if batch.transactions:
            output_file = output_path or self.csv_writer.generate_output_path(input_path)
            if self.csv_writer.write_transactions(batch.transactions, output_file):
                for problem in self.validation_engine.validate_csv_output(output_file):
                    self.error_handler.log_warning(
                        problem, "INVALID_RECORD", ErrorCategory.DATA_VALIDATION, file_path=output_file
                    )
            else:
                self.error_handler.log_error(
                    f"Failed to write output file {output_file}",
                    "OUTPUT_WRITE_ERROR",
                    ErrorCategory.FILE_ACCESS,
                    file_path=output_file
                )
                output_file = ""

        return {
            'success': not self.error_handler.has_errors(),
            'batch': batch,
            'output_file': output_file
        }


def _echo_batch(batch: BatchResult, output_file: str):
    click.echo(f"  Messages read: {batch.total_messages}")
    click.echo(f"  Transactions: {len(batch.transactions)}")
    for reason, count in batch.rejection_counts().items():
        click.echo(f"  Rejected ({reason}): {count}")
    if batch.warnings:
        click.echo(f"  Warnings: {len(batch.warnings)}")
    if output_file:
        click.echo(f"  Output: {output_file}")


# CLI Commands using Click
@click.group()
@click.option('--config', '-c', help='Path to configuration file')
@click.option('--log-dir', help='Directory for structured JSON logs')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, log_dir, verbose):
    """Money Tracker - Turn bank SMS notifications into transactions"""

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj['cli'] = MoneyTrackerCLI(config, log_directory=log_dir)


@cli.command()
@click.argument('text')
@click.option('--received-at', help='Receipt time in ISO format (default: now)')
@click.pass_context
def classify(ctx, text, received_at):
    """Classify a single message and print the result as JSON"""

    cli_instance = ctx.obj['cli']

    try:
        received = datetime.fromisoformat(received_at) if received_at else datetime.now()
    except ValueError:
        click.echo(f"✗ Invalid --received-at value: {received_at}")
        sys.exit(1)

    result = cli_instance.classifier.classify(text, received)

    if isinstance(result, Rejected):
        click.echo(f"✗ Rejected: {result.reason.value}")
        return

    click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


@cli.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', help='Output CSV path (default: <output_directory>/<input>.csv)')
@click.option('--jsonl', is_flag=True, help='Input is JSON lines with body/received_at/sender')
@click.option('--report', '-r', help='Save error report to specified file')
@click.pass_context
def ingest(ctx, input_file, output, jsonl, report):
    """Classify every message in a file and write transactions to CSV"""

    cli_instance = ctx.obj['cli']

    try:
        result = cli_instance.ingest(input_file, output_path=output, jsonl=jsonl)
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"✗ Error reading {input_file}: {str(e)}")
        sys.exit(1)

    if report:
        cli_instance.error_handler.generate_error_report(report)

    if result['success']:
        click.echo("✓ Ingestion completed")
    else:
        click.echo("✗ Ingestion completed with errors")
    _echo_batch(result['batch'], result['output_file'])

    if not result['success']:
        sys.exit(1)


@cli.command()
@click.argument('csv_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--month', help='Restrict to transactions received in YYYY-MM')
@click.pass_context
def summary(ctx, csv_file, month):
    """Show expenses grouped by tag"""

    cli_instance = ctx.obj['cli']

    month_filter = None
    if month:
        try:
            parsed = datetime.strptime(month, '%Y-%m')
        except ValueError:
            click.echo(f"✗ Invalid --month value: {month} (expected YYYY-MM)")
            sys.exit(1)
        month_filter = (parsed.year, parsed.month)

    try:
        transactions = cli_instance.csv_writer.read_transactions(csv_file)
    except ValueError as e:
        click.echo(f"✗ {str(e)}")
        sys.exit(1)

    expense_summary = ExpenseSummary(transactions, month=month_filter)
    rows = expense_summary.by_tag()

    if not rows:
        click.echo("No expenses found")
        return

    click.echo(f"Total Expenses: ₹{expense_summary.total:.2f}")
    click.echo("=" * 40)
    for row in rows:
        click.echo(f"{row.tag:<16} ₹{row.amount:>12.2f} {row.percentage:>6}%  ({row.count})")

    popular = tag_usage(transactions, limit=5)
    if popular:
        click.echo()
        click.echo(f"Most used tags: {', '.join(popular)}")


@cli.command('init-config')
@click.argument('output_path', default='money_tracker.json')
@click.option('--format', 'fmt', type=click.Choice(['json', 'yaml']), default='json', help='Configuration file format')
@click.pass_context
def init_config(ctx, output_path, fmt):
    """Generate configuration template file"""

    cli_instance = ctx.obj['cli']

    if fmt == 'yaml' and not output_path.endswith(('.yml', '.yaml')):
        output_path = os.path.splitext(output_path)[0] + '.yml'
    elif fmt == 'json' and not output_path.endswith('.json'):
        output_path = os.path.splitext(output_path)[0] + '.json'

    try:
        cli_instance.config_manager.save_config_template(output_path)
    except OSError as e:
        click.echo(f"✗ Error generating config template: {str(e)}")
        sys.exit(1)

    click.echo(f"✓ Configuration template generated: {output_path}")
    click.echo("  Edit the file to add banks, merchant keywords or candidate keywords")


if __name__ == '__main__':
    cli()
