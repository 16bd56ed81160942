import logging
from concurrent.futures import Executor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from .bank.bank_registry import BankRegistry
from .classifier import MessageClassifier
from .config import Settings
from .dedup import Deduplicator
from .extractor import ParseResult, TransactionExtractor
from .parsed_transaction import ParseFailure, ParseWarning, ParsedTransaction, WarningKind
from .recurring.detector import RecurringTransactionDetector
from .recurring.models import RecurringTransaction
from .sms_message import RawMessage

logger = logging.getLogger(__name__)


# ---- collaborator interfaces ----
class TransactionStore(Protocol):
    def exists(self, sms_id: int) -> bool: ...

    def save_all(self, transactions: Sequence[ParsedTransaction]) -> None: ...

    def get_all_snapshot(self) -> List[ParsedTransaction]: ...

    def save_recurring(self, patterns: Sequence[RecurringTransaction]) -> None: ...

    def clear_recurring(self) -> None: ...


class FailureReporter(Protocol):
    def report(self, failure: ParseFailure) -> None: ...


@dataclass
class UnparsedReport:
    """A bank message queued for the user to review because it could not be parsed."""

    sms_id: int
    sender_address: str
    body: str
    sms_date: int
    reason: str
    detail: str
    reported_at: int
    status: str = "pending"
    user_notes: Optional[str] = None


# ---- in-memory implementations ----
class InMemoryTransactionStore:
    def __init__(self):
        self._transactions: Dict[int, ParsedTransaction] = {}
        self._recurring: List[RecurringTransaction] = []

    def exists(self, sms_id: int) -> bool:
        return sms_id in self._transactions

    def save_all(self, transactions: Sequence[ParsedTransaction]) -> None:
        for txn in transactions:
            self._transactions[txn.sms_id] = txn

    def get_all_snapshot(self) -> List[ParsedTransaction]:
        return sorted(self._transactions.values(), key=lambda t: (t.date, t.sms_id))

    def save_recurring(self, patterns: Sequence[RecurringTransaction]) -> None:
        self._recurring.extend(patterns)

    def clear_recurring(self) -> None:
        self._recurring = []

    def get_recurring(self) -> List[RecurringTransaction]:
        return list(self._recurring)

    def __len__(self) -> int:
        return len(self._transactions)


class CollectingFailureReporter:
    """Keeps one pending report per unparsed sms id."""

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or (lambda: int(datetime.now(timezone.utc).timestamp() * 1000))
        self.reports: Dict[int, UnparsedReport] = {}

    def report(self, failure: ParseFailure) -> None:
        if failure.sms_id in self.reports:
            return
        self.reports[failure.sms_id] = UnparsedReport(
            sms_id=failure.sms_id,
            sender_address=failure.sender_address,
            body=failure.body,
            sms_date=failure.timestamp,
            reason=failure.reason.value,
            detail=failure.detail,
            reported_at=self._clock(),
        )

    def pending(self) -> List[UnparsedReport]:
        return [r for r in self.reports.values() if r.status == "pending"]


# ---- pipeline ----
@dataclass
class SyncResult:
    total_messages: int = 0
    bank_messages: int = 0
    saved: List[ParsedTransaction] = field(default_factory=list)
    failures: List[ParseFailure] = field(default_factory=list)
    warnings: List[ParseWarning] = field(default_factory=list)
    duplicates_dropped: int = 0

    @property
    def lookup_misses(self) -> int:
        return sum(1 for w in self.warnings if w.kind == WarningKind.REGISTRY_LOOKUP_MISS)


class SmsSyncPipeline:
    """
    classify -> parse -> dedupe -> save, then recurring detection on demand.

    Parsing is pure per message and may be spread over an executor; the
    dedupe and save step always runs sequentially on the calling thread.
    """

    def __init__(
        self,
        registry: BankRegistry,
        store: TransactionStore,
        reporter: Optional[FailureReporter] = None,
        deduplicator: Optional[Deduplicator] = None,
        detector: Optional[RecurringTransactionDetector] = None,
    ):
        if not registry.frozen:
            registry.freeze()
        self.registry = registry
        self.store = store
        self.reporter = reporter
        self.classifier = MessageClassifier(registry)
        self.extractor = TransactionExtractor(registry)
        self.deduplicator = deduplicator or Deduplicator()
        self.detector = detector or RecurringTransactionDetector()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        registry: BankRegistry,
        store: TransactionStore,
        reporter: Optional[FailureReporter] = None,
    ) -> "SmsSyncPipeline":
        return cls(
            registry,
            store,
            reporter,
            deduplicator=Deduplicator(
                window_minutes=settings.dedup_window_minutes,
                unidentified_window_seconds=settings.dedup_unidentified_window_seconds,
            ),
            detector=RecurringTransactionDetector(
                min_occurrences=settings.recurring_min_occurrences,
                amount_tolerance=settings.recurring_amount_tolerance,
                interval_tolerance=settings.recurring_interval_tolerance,
            ),
        )

    def _parse_one(self, message: RawMessage) -> Tuple[ParseResult, List[ParseWarning]]:
        return self.extractor.parse_with_warnings(message, self.extractor.lookup(message))

    def parse_batch(
        self, bank_messages: Sequence[RawMessage], executor: Optional[Executor] = None
    ) -> Tuple[List[ParsedTransaction], List[ParseFailure], List[ParseWarning]]:
        # executor.map preserves input order
        outcomes = executor.map(self._parse_one, bank_messages) if executor else map(self._parse_one, bank_messages)

        parsed, failures, warnings = [], [], []
        for result, notes in outcomes:
            warnings.extend(notes)
            if isinstance(result, ParseFailure):
                failures.append(result)
            else:
                parsed.append(result)
        return parsed, failures, warnings

    def sync(self, messages: Iterable[RawMessage], executor: Optional[Executor] = None) -> SyncResult:
        messages = list(messages)
        result = SyncResult(total_messages=len(messages))

        bank_messages = self.classifier.filter_bank_messages(messages)
        result.bank_messages = len(bank_messages)
        candidates, result.failures, result.warnings = self.parse_batch(bank_messages, executor)

        unique = self.deduplicator.dedupe(
            candidates,
            already_persisted=self.store.exists,
            persisted_transactions=self.store.get_all_snapshot(),
        )
        result.duplicates_dropped = len(candidates) - len(unique)

        if unique:
            self.store.save_all(unique)
        result.saved = unique

        if self.reporter is not None:
            for failure in result.failures:
                self.reporter.report(failure)

        logger.info(
            "Sync finished: %d messages, %d bank, %d saved, %d duplicates, %d failed",
            result.total_messages, result.bank_messages, len(unique),
            result.duplicates_dropped, len(result.failures),
        )
        return result

    def refresh_recurring(self, should_cancel: Optional[Callable[[], bool]] = None) -> List[RecurringTransaction]:
        """Re-run detection over the full store and replace the stored patterns."""
        patterns = self.detector.detect(self.store.get_all_snapshot(), should_cancel=should_cancel)
        self.store.clear_recurring()
        self.store.save_recurring(patterns)
        return patterns
