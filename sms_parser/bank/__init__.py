from .bank_config import BankConfig, PatternSet
from .bank_registry import BankEntry, BankRegistry, build_default_registry

__all__ = ["BankConfig", "PatternSet", "BankEntry", "BankRegistry", "build_default_registry"]
