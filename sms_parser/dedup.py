import logging
from collections import defaultdict
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Sequence, Set, Tuple, Union

from .constants import Constants
from .parsed_transaction import ParsedTransaction
from .transaction_type import TransactionType

logger = logging.getLogger(__name__)

PersistedIds = Union[Callable[[int], bool], Iterable[int]]


class Deduplicator:
    """
    Collapses the several SMS one real-world payment tends to produce.

    Identity dedup drops candidates whose sms id is already stored (or repeats
    earlier in the batch). Cross-message dedup then treats two candidates as
    the same transaction when amount and type match, their dates fall within
    the window, and their identifiers agree:

    * both carry a reference number: the references must be equal
    * otherwise both carry an account number: the accounts must be equal
    * otherwise the tighter no-identifier window applies and the reported
      balances, when both are present, must be equal

    The first occurrence in input order wins and output keeps input order.
    """

    def __init__(
        self,
        window_minutes: int = Constants.Dedup.WINDOW_MINUTES,
        unidentified_window_seconds: int = Constants.Dedup.UNIDENTIFIED_WINDOW_SECONDS,
    ):
        self.window_ms = window_minutes * 60 * 1000
        self.unidentified_window_ms = unidentified_window_seconds * 1000

    def dedupe(
        self,
        candidates: Sequence[ParsedTransaction],
        already_persisted: PersistedIds = (),
        persisted_transactions: Iterable[ParsedTransaction] = (),
    ) -> List[ParsedTransaction]:
        fresh = self.remove_persisted(candidates, already_persisted)
        unique = self.remove_cross_message_duplicates(fresh, persisted_transactions)
        dropped = len(candidates) - len(unique)
        if dropped:
            logger.debug("Dropped %d duplicate candidates of %d", dropped, len(candidates))
        return unique

    # ---- identity ----
    @staticmethod
    def remove_persisted(
        candidates: Sequence[ParsedTransaction], already_persisted: PersistedIds = ()
    ) -> List[ParsedTransaction]:
        if callable(already_persisted):
            exists = already_persisted
        else:
            persisted_ids = set(already_persisted)
            exists = persisted_ids.__contains__

        seen: Set[int] = set()
        kept = []
        for txn in candidates:
            if txn.sms_id in seen or exists(txn.sms_id):
                continue
            seen.add(txn.sms_id)
            kept.append(txn)
        return kept

    # ---- cross message ----
    def remove_cross_message_duplicates(
        self,
        candidates: Sequence[ParsedTransaction],
        persisted_transactions: Iterable[ParsedTransaction] = (),
    ) -> List[ParsedTransaction]:
        buckets: Dict[Tuple[Decimal, TransactionType], List[ParsedTransaction]] = defaultdict(list)
        for txn in persisted_transactions:
            buckets[(txn.amount, txn.type)].append(txn)

        kept = []
        for txn in candidates:
            bucket = buckets[(txn.amount, txn.type)]
            if any(self.is_duplicate(txn, other) for other in bucket):
                continue
            bucket.append(txn)
            kept.append(txn)
        return kept

    def is_duplicate(self, a: ParsedTransaction, b: ParsedTransaction) -> bool:
        if a.amount != b.amount or a.type != b.type:
            return False

        gap = abs(a.date - b.date)
        if gap > self.window_ms:
            return False

        if a.reference_number and b.reference_number:
            return a.reference_number.upper() == b.reference_number.upper()

        if a.account_number and b.account_number:
            return a.account_number == b.account_number

        if gap > self.unidentified_window_ms:
            return False
        if a.balance_after is not None and b.balance_after is not None:
            return a.balance_after == b.balance_after
        return True
