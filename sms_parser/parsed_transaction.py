from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
import hashlib
from typing import Optional

from .exceptions import InvalidTransactionError
from .transaction_type import PaymentMethod, TransactionType

TWO_PLACES = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ParsedTransaction:
    sms_id: int
    amount: Decimal
    type: TransactionType
    date: int
    raw_sms: str
    sender_address: str
    merchant: Optional[str] = None
    account_number: Optional[str] = None
    reference_number: Optional[str] = None
    balance_after: Optional[Decimal] = None
    location: Optional[str] = None
    upi_id: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    bank_name: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            raise InvalidTransactionError(f"amount must be a Decimal, got {type(self.amount).__name__}")
        if self.amount < 0:
            raise InvalidTransactionError(f"amount must not be negative: {self.amount}")
        if self.date <= 0:
            raise InvalidTransactionError(f"date must be a positive epoch millis value: {self.date}")
        object.__setattr__(self, "amount", to_money(self.amount))
        if self.balance_after is not None:
            object.__setattr__(self, "balance_after", to_money(self.balance_after))

    def generate_transaction_id(self) -> str:
        # SMS body hash keeps the id stable across re-reads of the same message
        sms_body_hash = hashlib.md5(self.raw_sms.encode()).hexdigest()[:16]
        data = f"{self.sender_address}|{self.amount}|{sms_body_hash}"
        return hashlib.md5(data.encode()).hexdigest()

    def to_dict(self) -> dict:
        return {
            "sms_id": self.sms_id,
            "amount": str(self.amount),
            "type": self.type.value,
            "date": self.date,
            "merchant": self.merchant,
            "account_number": self.account_number,
            "reference_number": self.reference_number,
            "balance_after": str(self.balance_after) if self.balance_after is not None else None,
            "location": self.location,
            "upi_id": self.upi_id,
            "payment_method": self.payment_method.value if self.payment_method else None,
            "bank_name": self.bank_name,
            "sender_address": self.sender_address,
            "transaction_id": self.generate_transaction_id(),
        }


class FailureReason(Enum):
    NO_AMOUNT = "NO_AMOUNT"
    MALFORMED_DATE = "MALFORMED_DATE"


@dataclass(frozen=True)
class ParseFailure:
    """A bank message the extractor could not turn into a transaction."""

    sms_id: int
    sender_address: str
    body: str
    timestamp: int
    reason: FailureReason
    detail: str = ""

    def to_dict(self) -> dict:
        return {
            "sms_id": self.sms_id,
            "sender_address": self.sender_address,
            "reason": self.reason.value,
            "detail": self.detail,
        }


class WarningKind(Enum):
    AMBIGUOUS_MERCHANT = "AMBIGUOUS_MERCHANT"
    REGISTRY_LOOKUP_MISS = "REGISTRY_LOOKUP_MISS"


@dataclass(frozen=True)
class ParseWarning:
    """Non-fatal note about a message that still produced a transaction."""

    sms_id: int
    kind: WarningKind
    detail: str = ""
