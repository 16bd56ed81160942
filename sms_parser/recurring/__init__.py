from .detector import RecurringTransactionDetector
from .models import RecurringTransaction

__all__ = ["RecurringTransactionDetector", "RecurringTransaction"]
