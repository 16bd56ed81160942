import logging
import re
import uuid
from collections import Counter
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, List, Optional

import pandas as pd

from ..constants import Constants
from ..exceptions import DetectionCancelled
from ..parsed_transaction import ParsedTransaction, to_money
from ..transaction_type import RecurringType, TransactionType
from .frequency import classify_frequency, consistent_interval, intervals_in_days
from .merchant_matcher import normalize
from .models import RecurringTransaction

logger = logging.getLogger(__name__)

_ID_NAMESPACE = uuid.UUID("6f1c2a52-9d0e-4c8b-a1f3-5e7d2b9c4a10")


def _words(*words: str) -> re.Pattern:
    return re.compile(r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b", re.IGNORECASE)


class TypeRules:
    SALARY = _words("SALARY", "SAL", "PAYROLL")
    RENT = _words("RENT", "LANDLORD", "HOUSING")
    EMI = _words("EMI", "LOAN", "FINANCE", "BAJAJ", "HDFC", "ICICI")
    EMI_TEXT = _words("EMI", "LOAN")
    UTILITY = _words("ELECTRIC", "ELECTRICITY", "WATER", "GAS", "BILL", "BSES", "TATA POWER", "BROADBAND")
    SUBSCRIPTION = _words("NETFLIX", "PRIME", "SPOTIFY", "YOUTUBE", "SUBSCRIPTION", "ADOBE", "MICROSOFT", "HOTSTAR")


# =========================
# 1) FRAME BUILDING
# =========================
def transactions_frame(transactions: Iterable[ParsedTransaction]) -> pd.DataFrame:
    """
    One row per debit/credit transaction with a usable merchant.
    UNKNOWN-type and merchant-less transactions cannot form a pattern.
    """
    rows = []
    for txn in transactions:
        if txn.type == TransactionType.UNKNOWN or not txn.merchant:
            continue
        key = normalize(txn.merchant)
        if not key:
            continue
        rows.append({
            "sms_id": txn.sms_id,
            "merchant": txn.merchant,
            "merchant_key": key,
            "type": txn.type.value,
            "amount": txn.amount,
            "amount_f": float(txn.amount),
            "date": txn.date,
            "raw_sms": txn.raw_sms,
        })
    return pd.DataFrame(
        rows,
        columns=["sms_id", "merchant", "merchant_key", "type", "amount", "amount_f", "date", "raw_sms"],
    )


# =========================
# 2) AMOUNT CLUSTERING
# =========================
def amount_clusters(group: pd.DataFrame, tolerance: float) -> List[pd.DataFrame]:
    """
    Single-link clusters over amount: two amounts link when their difference
    is within ``tolerance`` of the larger one. On sorted values this reduces
    to splitting wherever consecutive amounts are too far apart.
    """
    ordered = group.sort_values(["amount_f", "date", "sms_id"], kind="mergesort").reset_index(drop=True)
    amounts = ordered["amount_f"].tolist()

    cluster_ids = []
    current = 0
    for i, amount in enumerate(amounts):
        if i > 0:
            prev = amounts[i - 1]
            larger = max(amount, prev)
            if larger > 0 and (amount - prev) / larger > tolerance:
                current += 1
        cluster_ids.append(current)

    ordered["cluster"] = cluster_ids
    return [cluster.drop(columns="cluster") for _, cluster in ordered.groupby("cluster", sort=True)]


def median_amount(amounts: List[Decimal]) -> Decimal:
    ordered = sorted(amounts)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return to_money(ordered[mid])
    return to_money((ordered[mid - 1] + ordered[mid]) / 2)


# =========================
# 3) TYPE HEURISTICS
# =========================
def infer_recurring_type(merchant_key: str, txn_type: TransactionType, amount: Decimal, texts: Iterable[str]) -> RecurringType:
    merchant = merchant_key.upper()
    body = " ".join(texts)

    if txn_type == TransactionType.CREDIT:
        if TypeRules.SALARY.search(merchant) or TypeRules.SALARY.search(body):
            return RecurringType.SALARY
        if amount > Constants.Recurring.SALARY_MIN_AMOUNT:
            return RecurringType.SALARY

    if TypeRules.RENT.search(merchant):
        return RecurringType.RENT
    if txn_type == TransactionType.DEBIT and TypeRules.EMI.search(merchant):
        return RecurringType.EMI
    if txn_type == TransactionType.DEBIT and TypeRules.EMI_TEXT.search(body):
        return RecurringType.EMI
    if TypeRules.UTILITY.search(merchant):
        return RecurringType.UTILITY
    if TypeRules.SUBSCRIPTION.search(merchant):
        return RecurringType.SUBSCRIPTION
    if txn_type == TransactionType.DEBIT and amount < Constants.Recurring.SUBSCRIPTION_MAX_AMOUNT:
        return RecurringType.SUBSCRIPTION
    return RecurringType.OTHER


# =========================
# 4) DETECTOR
# =========================
class RecurringTransactionDetector:
    """
    Finds recurring payments and receipts in transaction history.

    Transactions are grouped by normalized merchant and direction, split into
    amount clusters, and a cluster becomes a pattern when it has enough members
    and every gap between consecutive members stays within the interval
    tolerance of the median gap. Output is deterministic for a given input.
    """

    def __init__(
        self,
        min_occurrences: int = Constants.Recurring.MIN_OCCURRENCES,
        amount_tolerance: float = Constants.Recurring.AMOUNT_TOLERANCE,
        interval_tolerance: float = Constants.Recurring.INTERVAL_TOLERANCE,
    ):
        self.min_occurrences = min_occurrences
        self.amount_tolerance = amount_tolerance
        self.interval_tolerance = interval_tolerance

    def detect(
        self,
        transactions: Iterable[ParsedTransaction],
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> List[RecurringTransaction]:
        df = transactions_frame(transactions)
        if df.empty:
            return []

        patterns: List[RecurringTransaction] = []
        for (merchant_key, txn_type), group in df.groupby(["merchant_key", "type"], sort=True):
            if should_cancel is not None and should_cancel():
                raise DetectionCancelled(f"Cancelled before merchant group {merchant_key!r}")
            if len(group) < self.min_occurrences:
                continue
            for cluster in amount_clusters(group, self.amount_tolerance):
                pattern = self._evaluate_cluster(cluster, merchant_key, TransactionType(txn_type))
                if pattern is not None:
                    patterns.append(pattern)

        patterns.sort(key=lambda p: (p.merchant_key, p.transaction_type.value, p.expected_amount))
        logger.info("Detected %d recurring patterns from %d transactions", len(patterns), len(df))
        return patterns

    def _evaluate_cluster(
        self, cluster: pd.DataFrame, merchant_key: str, txn_type: TransactionType
    ) -> Optional[RecurringTransaction]:
        if len(cluster) < self.min_occurrences:
            return None

        cluster = cluster.sort_values(["date", "sms_id"], kind="mergesort")
        dates = cluster["date"].tolist()
        ok, median_days = consistent_interval(intervals_in_days(dates), self.interval_tolerance)
        if not ok:
            return None

        expected = median_amount(list(cluster["amount"]))
        member_ids = tuple(int(i) for i in cluster["sms_id"])
        last_seen = int(dates[-1])

        return RecurringTransaction(
            id=self._pattern_id(merchant_key, txn_type, member_ids),
            type=infer_recurring_type(merchant_key, txn_type, expected, cluster["raw_sms"]),
            merchant=self._representative_name(cluster["merchant"]),
            merchant_key=merchant_key,
            transaction_type=txn_type,
            expected_amount=expected,
            amount_tolerance=(expected * Decimal(str(self.amount_tolerance))).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            ),
            interval_days=median_days,
            interval_tolerance_days=median_days * self.interval_tolerance,
            frequency=classify_frequency(median_days),
            last_seen_date=last_seen,
            next_expected_date=last_seen + int(round(median_days * Constants.MILLIS_PER_DAY)),
            member_transaction_ids=member_ids,
        )

    @staticmethod
    def _representative_name(names: Iterable[str]) -> str:
        counts = Counter(names)
        return max(sorted(counts), key=lambda n: counts[n])

    @staticmethod
    def _pattern_id(merchant_key: str, txn_type: TransactionType, member_ids) -> str:
        seed = f"{merchant_key}|{txn_type.value}|{','.join(str(i) for i in sorted(member_ids))}"
        return str(uuid.uuid5(_ID_NAMESPACE, seed))
