"""Message-to-transaction pipeline combining the extraction stages."""

import logging
from datetime import datetime
from typing import Iterable, Optional, Union

from .extractors import (
    AccountInfoExtractor,
    AmountExtractor,
    BankIdentifier,
    CategoryTagger,
    DirectionClassifier,
    MessageFilter,
    TransactionTimeExtractor,
)
from .models.core import (
    BatchResult,
    ClassifierConfig,
    ExtractedTransaction,
    RawMessage,
    Rejected,
    RejectionReason,
)
from .utils.validation import ValidationEngine


logger = logging.getLogger(__name__)

ClassificationResult = Union[ExtractedTransaction, Rejected]


class SmsTransactionClassifier:
    """Turns bank notification text into structured transactions.

    The classifier holds no state between messages: the same body and
    receipt time always produce the same result. The message filter and the
    amount extractor gate the pipeline; every other stage is best effort and
    contributes an empty string when it finds nothing.

    Example:
        classifier = SmsTransactionClassifier()
        result = classifier.classify("Rs.500 debited from A/c XX1234", received_at)
        if isinstance(result, ExtractedTransaction):
            sink.save(result)
    """

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self.config = config or ClassifierConfig()

        self.message_filter = MessageFilter(self.config)
        self.amount_extractor = AmountExtractor(self.config)
        self.direction_classifier = DirectionClassifier(self.config)
        self.bank_identifier = BankIdentifier(self.config)
        self.account_extractor = AccountInfoExtractor(self.config)
        self.time_extractor = TransactionTimeExtractor(self.config)
        self.category_tagger = CategoryTagger(self.config)

        self.validation_engine = ValidationEngine(
            known_banks=self.bank_identifier.canonical_names,
            known_tags=self.category_tagger.known_tags,
        )

    def classify(self, body: str, received_at: datetime) -> ClassificationResult:
        """Classify a single message body.

        Args:
            body: Raw message text
            received_at: Receipt time from the ingestion source. The result depends
                only on ``body`` and ``received_at``

        Returns:
            ExtractedTransaction on success, Rejected when the message is not a
            candidate or carries no parseable amount
        """
        if not self.message_filter.is_candidate(body):
            logger.debug("Message rejected: no candidate keyword")
            return Rejected(RejectionReason.NO_CANDIDATE, body or "")

        amount, raw_amount = self.amount_extractor.match_amount(body)
        if amount is None:
            reason = RejectionReason.NO_AMOUNT if raw_amount is None else RejectionReason.MALFORMED_NUMERIC
            logger.debug(f"Message rejected: {reason.value}")
            return Rejected(reason, body)

        account_info = self.account_extractor.extract_account_info(body)

        return ExtractedTransaction(
            amount=amount,
            is_expense=self.direction_classifier.is_expense(body),
            bank=self.bank_identifier.identify_bank(body) or "",
            account_type=account_info.account_type or "",
            account_number=account_info.account_number or "",
            transaction_time=self.time_extractor.extract_transaction_time(body) or "",
            tag=self.category_tagger.extract_tag(body) or "",
            source_body=body,
            received_at=received_at,
        )

    def classify_message(self, message: RawMessage) -> ClassificationResult:
        return self.classify(message.body, message.received_at)

    def classify_batch(self, messages: Iterable[RawMessage]) -> BatchResult:
        """Classify messages independently and collect the outcomes.

        Records that break a record invariant are kept but reported in
        ``BatchResult.warnings``.
        """
        result = BatchResult()

        for index, message in enumerate(messages, start=1):
            outcome = self.classify_message(message)
            if isinstance(outcome, Rejected):
                result.rejections.append(outcome)
                continue

            for problem in self.validation_engine.validate_transaction(outcome):
                result.warnings.append(f"Message {index}: {problem}")
            result.transactions.append(outcome)

        logger.info(
            f"Classified {result.total_messages} messages: "
            f"{len(result.transactions)} transactions, {len(result.rejections)} rejected"
        )
        return result


_default_classifier: Optional[SmsTransactionClassifier] = None


def classify(body: str, received_at: datetime) -> ClassificationResult:
    """Classify a message with the built-in tables"""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = SmsTransactionClassifier()
    return _default_classifier.classify(body, received_at)
