import logging
import re

import pytest

from sms_parser.bank import BankConfig, BankRegistry, PatternSet
from sms_parser.bank.bank_config import pattern
from sms_parser.exceptions import DuplicateSenderIdError, RegistryFrozenError


def _config(name, *sender_ids):
    return BankConfig(bank_name=name, display_name=name, sender_ids=sender_ids)


class TestDefaultRegistry:
    def test_lookup_is_case_insensitive(self, registry):
        upper = registry.find_by_sender("VM-HDFCBK")
        lower = registry.find_by_sender("vm-hdfcbk")

        assert upper is not None
        assert lower is upper
        assert upper.bank_name == "HDFC Bank"

    def test_lookup_ignores_surrounding_whitespace(self, registry):
        assert registry.find_by_sender("  VM-SBIINB ").bank_name == "State Bank of India"

    def test_unknown_and_empty_senders(self, registry):
        assert registry.find_by_sender("AX-NOBANK") is None
        assert registry.find_by_sender("") is None
        assert registry.find_by_sender(None) is None

    def test_bundles_all_banks(self, registry):
        assert registry.count() == 31
        assert len(registry) == 31
        names = {entry.bank_name for entry in registry.all_banks()}
        assert {"HDFC Bank", "Paytm Payments Bank", "Slice"} <= names

    def test_every_bank_has_sender_ids(self, registry):
        for entry in registry.all_banks():
            assert entry.config.sender_ids, entry.bank_name

    def test_shared_sender_id_goes_to_later_bank(self, registry):
        assert registry.find_by_sender("INDBNK").bank_name == "IndusInd Bank"
        assert registry.find_by_sender("INDIANBK").bank_name == "Indian Bank"

    def test_default_registry_is_frozen(self, registry):
        assert registry.frozen
        with pytest.raises(RegistryFrozenError):
            registry.register(_config("New Bank", "NEWBNK"))

    def test_all_banks_returns_a_copy(self, registry):
        banks = registry.all_banks()
        banks.clear()
        assert registry.count() == 31

    def test_overrides_attached(self, registry):
        hdfc = registry.find_by_sender("VM-HDFCBK")
        kotak = registry.find_by_sender("VK-KOTAKB")

        assert hdfc.patterns is not None
        assert hdfc.patterns.reference is not None
        assert kotak.patterns is None


class TestRegistration:
    def test_register_and_find(self):
        registry = BankRegistry()
        entry = registry.register(_config("Test Bank", "TB-TEST", "TESTBK"))

        assert registry.find_by_sender("tb-test") is entry
        assert registry.find_by_sender("TESTBK") is entry
        assert registry.count() == 1

    def test_sender_ids_are_stripped(self):
        config = _config("Test Bank", " TB-TEST ", "")
        assert config.sender_ids == ("TB-TEST",)

    def test_collision_last_wins_with_warning(self, caplog):
        registry = BankRegistry()
        registry.register(_config("First Bank", "SHARED", "FIRST"))

        with caplog.at_level(logging.WARNING, logger="sms_parser.bank.bank_registry"):
            registry.register(_config("Second Bank", "SHARED"))

        assert registry.find_by_sender("SHARED").bank_name == "Second Bank"
        assert registry.find_by_sender("FIRST").bank_name == "First Bank"
        assert any("SHARED" in r.getMessage() for r in caplog.records)

    def test_strict_registry_rejects_collision(self):
        registry = BankRegistry(strict=True)
        registry.register(_config("First Bank", "SHARED"))

        with pytest.raises(DuplicateSenderIdError) as exc:
            registry.register(_config("Second Bank", "shared"))

        assert exc.value.sender_id == "SHARED"
        assert exc.value.existing_bank == "First Bank"
        assert registry.find_by_sender("SHARED").bank_name == "First Bank"

    def test_same_bank_reregistering_is_not_a_collision(self):
        registry = BankRegistry(strict=True)
        registry.register(_config("Test Bank", "TB-TEST"))
        registry.register(_config("Test Bank", "TB-TEST"))
        assert registry.find_by_sender("TB-TEST").bank_name == "Test Bank"

    def test_freeze_blocks_registration(self):
        registry = BankRegistry()
        registry.register(_config("Test Bank", "TB-TEST"))
        assert registry.freeze() is registry

        with pytest.raises(RegistryFrozenError):
            registry.register(_config("Other Bank", "OTHER"))
        assert registry.count() == 1

    def test_patterns_are_kept_with_entry(self):
        patterns = PatternSet(amount=pattern(r"paid\s+(\d+)"), debit_keywords=("paid out",))
        registry = BankRegistry()
        registry.register(_config("Test Bank", "TB-TEST"), patterns)

        entry = registry.find_by_sender("TB-TEST")
        assert entry.patterns is patterns
        assert entry.patterns.amount.flags & re.IGNORECASE
