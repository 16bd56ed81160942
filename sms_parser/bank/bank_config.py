from dataclasses import dataclass, field
import re
from typing import Optional, Tuple


@dataclass(frozen=True)
class BankConfig:
    """Identity of one institution and the sender ids its alerts arrive from."""

    bank_name: str
    display_name: str
    sender_ids: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "sender_ids", tuple(s.strip() for s in self.sender_ids if s.strip()))


@dataclass(frozen=True)
class PatternSet:
    """
    Per-bank regex overrides.

    Every regex captures the wanted value in group 1. A field left as None
    falls back to the generic pattern library for that field only. The
    keyword tuples extend, never replace, the generic debit/credit verbs.
    """

    amount: Optional[re.Pattern] = None
    balance: Optional[re.Pattern] = None
    reference: Optional[re.Pattern] = None
    merchant: Optional[re.Pattern] = None
    date: Optional[re.Pattern] = None
    debit_keywords: Tuple[str, ...] = field(default_factory=tuple)
    credit_keywords: Tuple[str, ...] = field(default_factory=tuple)


def pattern(expr: str) -> re.Pattern:
    return re.compile(expr, re.IGNORECASE)
