from enum import Enum


class TransactionType(Enum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"
    UNKNOWN = "UNKNOWN"


class PaymentMethod(Enum):
    UPI = "UPI"
    CARD = "CARD"
    ATM = "ATM"
    NET_BANKING = "NET_BANKING"


class RecurringType(Enum):
    SUBSCRIPTION = "SUBSCRIPTION"
    EMI = "EMI"
    SALARY = "SALARY"
    RENT = "RENT"
    UTILITY = "UTILITY"
    OTHER = "OTHER"


class RecurringFrequency(Enum):
    WEEKLY = "WEEKLY"
    BI_WEEKLY = "BI_WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    ANNUAL = "ANNUAL"
    CUSTOM = "CUSTOM"
