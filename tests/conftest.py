"""
Pytest configuration and fixtures
"""

import itertools
import logging
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from sms_parser.api import create_app
from sms_parser.bank.bank_registry import build_default_registry
from sms_parser.config import Settings
from sms_parser.extractor import TransactionExtractor
from sms_parser.parsed_transaction import ParsedTransaction
from sms_parser.sms_message import RawMessage
from sms_parser.transaction_type import TransactionType

DAY_MS = 24 * 60 * 60 * 1000
# 2024-01-01T00:00:00Z
BASE_TS = 1_704_067_200_000


@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging() rewires the root logger; put it back after each test"""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture(scope="session")
def registry():
    return build_default_registry()


@pytest.fixture
def extractor(registry):
    return TransactionExtractor(registry)


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def make_message():
    counter = itertools.count(1)

    def _make(body, sender="VM-HDFCBK", timestamp=BASE_TS, sms_id=None):
        return RawMessage(
            id=sms_id if sms_id is not None else next(counter),
            sender_address=sender,
            body=body,
            timestamp=timestamp,
        )

    return _make


@pytest.fixture
def make_transaction():
    def _make(
        sms_id,
        amount,
        txn_type=TransactionType.DEBIT,
        date=BASE_TS,
        merchant=None,
        reference=None,
        account=None,
        balance=None,
        raw_sms="",
        sender="VM-HDFCBK",
    ):
        return ParsedTransaction(
            sms_id=sms_id,
            amount=Decimal(str(amount)),
            type=txn_type,
            date=date,
            raw_sms=raw_sms,
            sender_address=sender,
            merchant=merchant,
            account_number=account,
            reference_number=reference,
            balance_after=Decimal(str(balance)) if balance is not None else None,
        )

    return _make


@pytest.fixture
def client(settings, registry):
    """Create a test client for the API"""
    return TestClient(create_app(settings=settings, registry=registry))
