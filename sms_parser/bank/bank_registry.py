import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..exceptions import DuplicateSenderIdError, RegistryFrozenError
from .bank_config import BankConfig, PatternSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BankEntry:
    config: BankConfig
    patterns: Optional[PatternSet] = None

    @property
    def bank_name(self) -> str:
        return self.config.bank_name


class BankRegistry:
    """
    Lookup table from SMS sender id to bank.

    Sender ids are matched exactly but case-insensitively. Build the registry
    once, call ``freeze()``, then share it read-only between parser workers.
    When two banks claim the same sender id the later registration wins
    (a warning is logged) unless the registry was created with ``strict=True``,
    in which case the collision raises ``DuplicateSenderIdError``.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._entries: List[BankEntry] = []
        self._by_sender: Dict[str, BankEntry] = {}
        self._frozen = False

    def register(self, config: BankConfig, patterns: Optional[PatternSet] = None) -> BankEntry:
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {config.bank_name!r}: registry is frozen")

        entry = BankEntry(config=config, patterns=patterns)
        keys = [sender_id.upper() for sender_id in config.sender_ids]

        for key in keys:
            existing = self._by_sender.get(key)
            if existing is None or existing.bank_name == config.bank_name:
                continue
            if self.strict:
                raise DuplicateSenderIdError(key, existing.bank_name, config.bank_name)
            logger.warning(
                "Sender id %s moves from %s to %s",
                key, existing.bank_name, config.bank_name,
            )

        self._entries.append(entry)
        for key in keys:
            self._by_sender[key] = entry
        return entry

    def freeze(self) -> "BankRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def find_by_sender(self, sender_id: Optional[str]) -> Optional[BankEntry]:
        if not sender_id:
            return None
        return self._by_sender.get(sender_id.strip().upper())

    def all_banks(self) -> List[BankEntry]:
        return list(self._entries)

    def count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def build_default_registry() -> BankRegistry:
    """Registry preloaded with every bundled bank table, frozen."""
    from .fintech import FINTECH_BANKS
    from .indian_banks import INDIAN_BANKS
    from .payments_banks import PAYMENTS_BANKS

    registry = BankRegistry()
    for config, patterns in INDIAN_BANKS + PAYMENTS_BANKS + FINTECH_BANKS:
        registry.register(config, patterns)
    logger.debug("Loaded %d banks into registry", registry.count())
    return registry.freeze()
