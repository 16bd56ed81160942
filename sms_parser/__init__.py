"""Turn bank notification SMS into structured transactions."""

from .bank.bank_registry import BankRegistry, build_default_registry
from .classifier import MessageClassifier
from .dedup import Deduplicator
from .extractor import TransactionExtractor
from .parsed_transaction import FailureReason, ParseFailure, ParsedTransaction
from .pipeline import SmsSyncPipeline
from .recurring.detector import RecurringTransactionDetector
from .sms_message import RawMessage
from .transaction_type import TransactionType

__version__ = "1.0.0"

__all__ = [
    "BankRegistry",
    "build_default_registry",
    "MessageClassifier",
    "Deduplicator",
    "TransactionExtractor",
    "FailureReason",
    "ParseFailure",
    "ParsedTransaction",
    "SmsSyncPipeline",
    "RecurringTransactionDetector",
    "RawMessage",
    "TransactionType",
]
