from decimal import Decimal

import numpy as np
import pytest

from sms_parser.exceptions import DetectionCancelled
from sms_parser.recurring import RecurringTransactionDetector
from sms_parser.recurring.frequency import classify_frequency, consistent_interval, describe_frequency
from sms_parser.recurring.merchant_matcher import normalize
from sms_parser.transaction_type import RecurringFrequency, RecurringType, TransactionType

from .conftest import BASE_TS, DAY_MS


@pytest.fixture
def detector():
    return RecurringTransactionDetector()


@pytest.fixture
def series(make_transaction):
    """Transactions for one merchant at the given (day offset, amount) points."""

    def _make(merchant, points, txn_type=TransactionType.DEBIT, first_id=1, raw_sms=""):
        return [
            make_transaction(
                first_id + i, amount, txn_type=txn_type, date=BASE_TS + day * DAY_MS,
                merchant=merchant, raw_sms=raw_sms,
            )
            for i, (day, amount) in enumerate(points)
        ]

    return _make


class TestDetection:
    def test_monthly_subscription(self, detector, series):
        txns = series("Netflix", [(0, 499), (30, 499), (61, 504), (91, 499)])

        patterns = detector.detect(txns)

        assert len(patterns) == 1
        pattern = patterns[0]
        assert pattern.type == RecurringType.SUBSCRIPTION
        assert pattern.transaction_type == TransactionType.DEBIT
        assert abs(pattern.expected_amount - Decimal("500")) <= Decimal("5")
        assert pattern.expected_amount == Decimal("499.00")
        assert 29 <= pattern.interval_days <= 31
        assert pattern.frequency == RecurringFrequency.MONTHLY
        assert pattern.frequency_label == "Monthly"
        assert pattern.member_transaction_ids == (1, 2, 3, 4)
        assert pattern.last_seen_date == BASE_TS + 91 * DAY_MS
        assert pattern.next_expected_date == BASE_TS + 121 * DAY_MS
        assert not pattern.is_user_confirmed
        assert not pattern.is_dismissed

    def test_two_occurrences_are_not_enough(self, detector, series):
        assert detector.detect(series("Netflix", [(0, 499), (30, 499)])) == []

    def test_irregular_intervals(self, detector, series):
        assert detector.detect(series("Netflix", [(0, 499), (10, 499), (40, 499), (45, 499)])) == []

    def test_same_day_transactions(self, detector, series):
        assert detector.detect(series("Netflix", [(0, 499), (0, 499), (0, 499)])) == []

    def test_amount_clusters_form_separate_patterns(self, detector, series):
        basic = series("Netflix", [(0, 199), (30, 199), (60, 199)], first_id=1)
        premium = series("Netflix", [(5, 649), (35, 649), (65, 649)], first_id=10)

        patterns = detector.detect(basic + premium)

        assert [p.expected_amount for p in patterns] == [Decimal("199.00"), Decimal("649.00")]

    def test_debits_and_credits_grouped_apart(self, detector, series):
        debits = series("Rahul Kumar", [(0, 2000), (30, 2000)], first_id=1)
        credits = series("Rahul Kumar", [(15, 2000)], txn_type=TransactionType.CREDIT, first_id=10)

        assert detector.detect(debits + credits) == []

    def test_unknown_type_and_missing_merchant_ignored(self, detector, series):
        unknown = series("Netflix", [(0, 499), (30, 499), (60, 499)], txn_type=TransactionType.UNKNOWN)
        nameless = series(None, [(0, 499), (30, 499), (60, 499)], first_id=10)

        assert detector.detect(unknown + nameless) == []

    def test_merchant_name_variants_grouped(self, detector, make_transaction):
        txns = [
            make_transaction(1, 499, date=BASE_TS, merchant="NETFLIX.COM"),
            make_transaction(2, 499, date=BASE_TS + 30 * DAY_MS, merchant="Netflix"),
            make_transaction(3, 499, date=BASE_TS + 60 * DAY_MS, merchant="Netflix"),
        ]
        patterns = detector.detect(txns)

        assert len(patterns) == 1
        assert patterns[0].merchant == "Netflix"
        assert patterns[0].merchant_key == "netflix"

    def test_weekly_frequency(self, detector, series):
        patterns = detector.detect(series("Milk Basket", [(0, 350), (7, 350), (14, 350), (21, 350)]))

        assert len(patterns) == 1
        assert patterns[0].frequency == RecurringFrequency.WEEKLY

    def test_min_occurrences_is_configurable(self, series):
        detector = RecurringTransactionDetector(min_occurrences=2)
        assert len(detector.detect(series("Netflix", [(0, 499), (30, 499)]))) == 1

    def test_pattern_ids_are_deterministic(self, detector, series):
        txns = series("Netflix", [(0, 499), (30, 499), (60, 499)])
        first = detector.detect(txns)
        second = detector.detect(list(reversed(txns)))

        assert [p.id for p in first] == [p.id for p in second]
        assert first == second

    def test_cancellation(self, detector, series):
        txns = series("Netflix", [(0, 499), (30, 499), (60, 499)])
        with pytest.raises(DetectionCancelled):
            detector.detect(txns, should_cancel=lambda: True)

    def test_to_dict(self, detector, series):
        pattern = detector.detect(series("Netflix", [(0, 499), (30, 499), (60, 499)]))[0]
        data = pattern.to_dict()

        assert data["expected_amount"] == "499.00"
        assert data["type"] == "SUBSCRIPTION"
        assert data["member_transaction_ids"] == [1, 2, 3]


class TestRecurringTypes:
    @pytest.mark.parametrize(
        "merchant, amount, txn_type, expected",
        [
            ("Acme Technologies", 50000, TransactionType.CREDIT, RecurringType.SALARY),
            ("Sharma Landlord", 25000, TransactionType.DEBIT, RecurringType.RENT),
            ("Bajaj Finance", 5000, TransactionType.DEBIT, RecurringType.EMI),
            ("Tata Power", 1500, TransactionType.DEBIT, RecurringType.UTILITY),
            ("Spotify", 1190, TransactionType.DEBIT, RecurringType.SUBSCRIPTION),
            ("Cult Fit", 450, TransactionType.DEBIT, RecurringType.SUBSCRIPTION),
            ("Gold Gym", 2500, TransactionType.DEBIT, RecurringType.OTHER),
        ],
    )
    def test_inferred_type(self, detector, series, merchant, amount, txn_type, expected):
        txns = series(merchant, [(0, amount), (30, amount), (60, amount)], txn_type=txn_type)
        patterns = detector.detect(txns)

        assert len(patterns) == 1
        assert patterns[0].type == expected

    def test_salary_keyword_in_sms(self, detector, series):
        txns = series(
            "Acme Technologies", [(0, 8000), (30, 8000), (60, 8000)],
            txn_type=TransactionType.CREDIT, raw_sms="Rs.8000 credited towards SALARY for Jan",
        )
        assert detector.detect(txns)[0].type == RecurringType.SALARY

    def test_emi_keyword_in_sms(self, detector, series):
        txns = series("Home Credit", [(0, 3200), (30, 3200), (60, 3200)], raw_sms="EMI of Rs.3200 debited")
        assert detector.detect(txns)[0].type == RecurringType.EMI


class TestFrequency:
    def test_classify_frequency(self):
        assert classify_frequency(7) == RecurringFrequency.WEEKLY
        assert classify_frequency(14) == RecurringFrequency.BI_WEEKLY
        assert classify_frequency(30.4) == RecurringFrequency.MONTHLY
        assert classify_frequency(91) == RecurringFrequency.QUARTERLY
        assert classify_frequency(365) == RecurringFrequency.ANNUAL
        assert classify_frequency(45) == RecurringFrequency.CUSTOM

    def test_describe_custom_frequency(self):
        assert describe_frequency(RecurringFrequency.CUSTOM, 45.2) == "Every 45 days"
        assert describe_frequency(RecurringFrequency.ANNUAL, 365) == "Yearly"

    def test_consistent_interval(self):
        assert consistent_interval(np.array([30.0, 31.0, 30.0]), 0.2) == (True, 30.0)
        assert consistent_interval(np.array([10.0, 30.0, 5.0]), 0.2)[0] is False
        assert consistent_interval(np.array([]), 0.2) == (False, 0.0)


class TestMerchantMatcher:
    @pytest.mark.parametrize(
        "name, key",
        [
            ("NETFLIX.COM", "netflix"),
            ("Netflix", "netflix"),
            ("netflix com", "netflix"),
            ("www.amazon.in", "amazon"),
            ("Amazon Pay India Pvt Ltd", "amazon pay india"),
            ("", ""),
        ],
    )
    def test_normalize(self, name, key):
        assert normalize(name) == key
