from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from ..transaction_type import RecurringFrequency, RecurringType, TransactionType
from .frequency import describe_frequency


@dataclass(frozen=True)
class RecurringTransaction:
    """One detected recurring pattern. A detection run replaces the whole set."""

    id: str
    type: RecurringType
    merchant: str
    merchant_key: str
    transaction_type: TransactionType
    expected_amount: Decimal
    amount_tolerance: Decimal
    interval_days: float
    interval_tolerance_days: float
    frequency: RecurringFrequency
    last_seen_date: int
    next_expected_date: int
    member_transaction_ids: Tuple[int, ...]
    is_user_confirmed: bool = False
    is_dismissed: bool = False

    @property
    def frequency_label(self) -> str:
        return describe_frequency(self.frequency, self.interval_days)

    @property
    def occurrences(self) -> int:
        return len(self.member_transaction_ids)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "merchant": self.merchant,
            "transaction_type": self.transaction_type.value,
            "expected_amount": str(self.expected_amount),
            "amount_tolerance": str(self.amount_tolerance),
            "interval_days": round(self.interval_days, 2),
            "interval_tolerance_days": round(self.interval_tolerance_days, 2),
            "frequency": self.frequency.value,
            "frequency_label": self.frequency_label,
            "last_seen_date": self.last_seen_date,
            "next_expected_date": self.next_expected_date,
            "member_transaction_ids": list(self.member_transaction_ids),
            "is_user_confirmed": self.is_user_confirmed,
            "is_dismissed": self.is_dismissed,
        }
