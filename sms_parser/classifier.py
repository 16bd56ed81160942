import logging
from typing import Iterable, List, Optional

from .bank.bank_registry import BankEntry, BankRegistry
from .compiled_patterns import CompiledPatterns, keyword_pattern
from .sms_message import RawMessage

logger = logging.getLogger(__name__)


class MessageClassifier:
    """
    Decides whether an SMS is a bank transaction alert.

    Known bank senders only need to mention an amount; anything else must also
    carry a debit or credit verb. OTPs, offers, payment requests, due-date
    reminders, future-debit notices, mandate set-up notices and balance-only
    messages are never transactions.
    """

    def __init__(self, registry: BankRegistry):
        self.registry = registry

    def is_bank_message(self, message: RawMessage) -> bool:
        body = message.body or ""
        if not body.strip():
            return False

        if self.is_excluded(body):
            return False

        entry = self.registry.find_by_sender(message.sender_address)
        has_amount = self._has_amount(body, entry)
        has_verb = self.has_transaction_verb(body, entry)

        if not has_verb and CompiledPatterns.Filters.BALANCE_ENQUIRY.search(body):
            return False

        if entry is not None:
            return has_amount
        return has_amount and has_verb

    def filter_bank_messages(self, messages: Iterable[RawMessage]) -> List[RawMessage]:
        kept = [m for m in messages if self.is_bank_message(m)]
        logger.debug("Classifier kept %d messages", len(kept))
        return kept

    # -------------------------------------------------------------------------
    # helpers
    # -------------------------------------------------------------------------
    @staticmethod
    def is_excluded(body: str) -> bool:
        return any(p.search(body) for p in CompiledPatterns.Filters.ALL_PATTERNS)

    @staticmethod
    def has_transaction_verb(body: str, entry: Optional[BankEntry] = None) -> bool:
        if CompiledPatterns.Keywords.DEBIT_PATTERN.search(body):
            return True
        if CompiledPatterns.Keywords.CREDIT_PATTERN.search(body):
            return True
        patterns = entry.patterns if entry else None
        if patterns is not None:
            extra = patterns.debit_keywords + patterns.credit_keywords
            if extra and keyword_pattern(extra).search(body):
                return True
        return False

    @staticmethod
    def _has_amount(body: str, entry: Optional[BankEntry]) -> bool:
        if CompiledPatterns.Amount.CURRENCY_AMOUNT.search(body):
            return True
        patterns = entry.patterns if entry else None
        return bool(patterns and patterns.amount and patterns.amount.search(body))
