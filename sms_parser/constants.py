from decimal import Decimal


class Constants:
    class Parsing:
        MIN_MERCHANT_NAME_LENGTH = 2
        MAX_MERCHANT_NAME_LENGTH = 50
        MIN_VPA_NAME_LENGTH = 3
        MIN_REFERENCE_LENGTH = 6
        MAX_REFERENCE_LENGTH = 22

    class Dedup:
        WINDOW_MINUTES = 5
        UNIDENTIFIED_WINDOW_SECONDS = 60

    class Recurring:
        MIN_OCCURRENCES = 3
        AMOUNT_TOLERANCE = 0.05
        INTERVAL_TOLERANCE = 0.20
        SALARY_MIN_AMOUNT = Decimal("10000")
        SUBSCRIPTION_MAX_AMOUNT = Decimal("1000")

        # (min_days, max_days) per display bucket, inclusive
        WEEKLY_DAYS = (6, 8)
        BI_WEEKLY_DAYS = (12, 16)
        MONTHLY_DAYS = (28, 31)
        QUARTERLY_DAYS = (72, 108)
        ANNUAL_DAYS = (292, 438)

    MILLIS_PER_DAY = 24 * 60 * 60 * 1000
