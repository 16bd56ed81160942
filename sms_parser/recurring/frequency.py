from typing import Sequence, Tuple

import numpy as np

from ..constants import Constants
from ..transaction_type import RecurringFrequency

_BUCKETS = [
    (RecurringFrequency.WEEKLY, Constants.Recurring.WEEKLY_DAYS),
    (RecurringFrequency.BI_WEEKLY, Constants.Recurring.BI_WEEKLY_DAYS),
    (RecurringFrequency.MONTHLY, Constants.Recurring.MONTHLY_DAYS),
    (RecurringFrequency.QUARTERLY, Constants.Recurring.QUARTERLY_DAYS),
    (RecurringFrequency.ANNUAL, Constants.Recurring.ANNUAL_DAYS),
]

_LABELS = {
    RecurringFrequency.WEEKLY: "Weekly",
    RecurringFrequency.BI_WEEKLY: "Every 2 weeks",
    RecurringFrequency.MONTHLY: "Monthly",
    RecurringFrequency.QUARTERLY: "Quarterly",
    RecurringFrequency.ANNUAL: "Yearly",
}


def intervals_in_days(dates_ms: Sequence[int]) -> np.ndarray:
    """Gaps between consecutive dates, in days. Input must be sorted."""
    dates = np.asarray(dates_ms, dtype="int64")
    return np.diff(dates) / Constants.MILLIS_PER_DAY


def consistent_interval(intervals: np.ndarray, tolerance: float) -> Tuple[bool, float]:
    """
    (ok, median). ok when the median is positive and every interval lies
    within ``tolerance`` (a fraction) of it.
    """
    if intervals.size == 0:
        return False, 0.0
    median = float(np.median(intervals))
    if median <= 0:
        return False, median
    ok = bool(np.all(np.abs(intervals - median) <= tolerance * median))
    return ok, median


def classify_frequency(interval_days: float) -> RecurringFrequency:
    days = round(interval_days)
    for frequency, (low, high) in _BUCKETS:
        if low <= days <= high:
            return frequency
    return RecurringFrequency.CUSTOM


def describe_frequency(frequency: RecurringFrequency, interval_days: float) -> str:
    if frequency == RecurringFrequency.CUSTOM:
        return f"Every {round(interval_days)} days"
    return _LABELS[frequency]
