import logging
import re
import string
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Iterator, List, Optional, Tuple, Union

from .bank.bank_config import PatternSet
from .bank.bank_registry import BankEntry, BankRegistry
from .compiled_patterns import CompiledPatterns, keyword_pattern
from .constants import Constants
from .exceptions import InvalidTransactionError
from .parsed_transaction import (
    FailureReason,
    ParseFailure,
    ParseWarning,
    ParsedTransaction,
    WarningKind,
)
from .sms_message import RawMessage
from .transaction_type import PaymentMethod, TransactionType

logger = logging.getLogger(__name__)

# Bank alerts quote local (IST) dates
IST = timezone(timedelta(hours=5, minutes=30))

ParseResult = Union[ParsedTransaction, ParseFailure]

_COMMON_WORDS = {
    "USING", "VIA", "THROUGH", "BY", "WITH", "FOR", "TO", "FROM", "AT", "THE",
    "RS", "INR", "ON", "REF", "UPI", "NEFT", "IMPS",
}


def first_group(match: re.Match) -> Optional[str]:
    """Value of the first participating capture group."""
    for value in match.groups():
        if value is not None:
            return value
    return None


def normalize_merchant_name(raw: str) -> str:
    """Collapse spacing, drop company suffixes and stray punctuation, title-case, cap length."""
    name = CompiledPatterns.Cleaning.TRAILING_PARENTHESES.sub("", raw)
    name = CompiledPatterns.Cleaning.MULTI_SPACE.sub(" ", name).strip()
    name = CompiledPatterns.Cleaning.REPEATED_PUNCT.sub(r"\1", name)

    previous = None
    while previous != name:
        previous = name
        name = CompiledPatterns.Cleaning.BUSINESS_SUFFIX.sub("", name)
        name = CompiledPatterns.Cleaning.EDGE_PUNCT.sub("", name)

    name = string.capwords(name.lower())
    return name[:Constants.Parsing.MAX_MERCHANT_NAME_LENGTH].rstrip()


def merchant_from_vpa(vpa: str) -> Optional[str]:
    """'swiggy.order@axisbank' -> 'Swiggy Order'; phone-number VPAs give None."""
    user = vpa.split("@", 1)[0]
    name = CompiledPatterns.Cleaning.VPA_SEPARATORS.sub(" ", user).strip()
    without_digits = CompiledPatterns.Cleaning.MULTI_SPACE.sub(
        " ", CompiledPatterns.Cleaning.DIGITS.sub("", name)
    ).strip()
    if len(without_digits) >= Constants.Parsing.MIN_VPA_NAME_LENGTH:
        name = without_digits
    name = normalize_merchant_name(name)
    return name if is_valid_merchant_name(name) else None


def is_valid_merchant_name(name: str) -> bool:
    return (
        len(name) >= Constants.Parsing.MIN_MERCHANT_NAME_LENGTH
        and any(c.isalpha() for c in name)
        and name.upper() not in _COMMON_WORDS
        and not all(c.isdigit() for c in name)
        and "@" not in name
    )


def parse_date_text(text: str) -> Optional[int]:
    """Epoch millis (IST midnight) for a date string in any supported layout."""
    cleaned = re.sub(r"[,\s]+", " ", text).strip()
    candidates = [cleaned, cleaned.replace(" ", "-"), cleaned.replace(" ", "")]
    for candidate in candidates:
        for fmt in CompiledPatterns.Date.FORMATS:
            try:
                parsed = datetime.strptime(candidate, fmt)
            except ValueError:
                continue
            return int(parsed.replace(tzinfo=IST).timestamp() * 1000)
    return None


def _amount_value(text: str) -> Optional[Decimal]:
    try:
        return Decimal(text.replace(",", ""))
    except InvalidOperation:
        return None


def _distance(match: re.Match, span: Tuple[int, int]) -> int:
    start, end = span
    if match.end() <= start:
        return start - match.end()
    if match.start() >= end:
        return match.start() - end
    return 0


class TransactionExtractor:
    """
    Turns one bank SMS into a ParsedTransaction, or a ParseFailure saying why not.

    Each field is read with the bank's override regex when one is configured
    and falls back to the generic library otherwise, field by field. Parsing
    is pure: the same message always yields the same result, and nothing here
    raises for bad input.
    """

    def __init__(self, registry: Optional[BankRegistry] = None):
        self.registry = registry

    # -------------------------------------------------------------------------
    # entry points
    # -------------------------------------------------------------------------
    def parse_message(self, message: RawMessage) -> ParseResult:
        result, _ = self.parse_with_warnings(message, self.lookup(message))
        return result

    def parse(self, message: RawMessage, entry: Optional[BankEntry] = None) -> ParseResult:
        result, _ = self.parse_with_warnings(message, entry)
        return result

    def lookup(self, message: RawMessage) -> Optional[BankEntry]:
        if self.registry is None:
            return None
        return self.registry.find_by_sender(message.sender_address)

    def parse_with_warnings(
        self, message: RawMessage, entry: Optional[BankEntry] = None
    ) -> Tuple[ParseResult, List[ParseWarning]]:
        warnings: List[ParseWarning] = []
        body = message.body or ""
        patterns = entry.patterns if entry else None

        if entry is None:
            logger.debug("No bank registered for sender %s, using generic patterns", message.sender_address)
            warnings.append(ParseWarning(message.id, WarningKind.REGISTRY_LOOKUP_MISS, message.sender_address))

        found = self.extract_amount(body, patterns)
        if found is None:
            return self._failure(message, FailureReason.NO_AMOUNT, "no currency amount found"), warnings
        amount, amount_span = found

        txn_type = self.extract_transaction_type(body, amount_span, patterns)

        date = self.extract_date(message, patterns)
        if date is None:
            return self._failure(message, FailureReason.MALFORMED_DATE, "no usable timestamp or body date"), warnings

        upi_id = self.extract_upi_id(body)
        payment_method = self.detect_payment_method(body, upi_id)

        location = None
        merchant = None
        if payment_method == PaymentMethod.ATM:
            location = self.extract_location(body)
        else:
            merchant = self.extract_merchant(body, patterns)
            if merchant is None and upi_id:
                merchant = merchant_from_vpa(upi_id)
            if merchant is None:
                logger.debug("Could not identify merchant for sms %s", message.id)
                warnings.append(ParseWarning(message.id, WarningKind.AMBIGUOUS_MERCHANT))

        try:
            transaction = ParsedTransaction(
                sms_id=message.id,
                amount=amount,
                type=txn_type,
                date=date,
                raw_sms=body,
                sender_address=message.sender_address,
                merchant=merchant,
                account_number=self.extract_account_number(body),
                reference_number=self.extract_reference(body, patterns),
                balance_after=self.extract_balance(body, patterns),
                location=location,
                upi_id=upi_id,
                payment_method=payment_method,
                bank_name=entry.bank_name if entry else None,
            )
        except InvalidTransactionError as e:
            return self._failure(message, FailureReason.NO_AMOUNT, str(e)), warnings
        return transaction, warnings

    # -------------------------------------------------------------------------
    # extract_amount
    # -------------------------------------------------------------------------
    def extract_amount(
        self, body: str, patterns: Optional[PatternSet] = None
    ) -> Optional[Tuple[Decimal, Tuple[int, int]]]:
        for m in self._matches(body, patterns.amount if patterns else None, CompiledPatterns.Amount.ALL_PATTERNS):
            value = _amount_value(first_group(m))
            if value is not None:
                return value, m.span()
        return None

    # -------------------------------------------------------------------------
    # extract_transaction_type
    # -------------------------------------------------------------------------
    def extract_transaction_type(
        self, body: str, amount_span: Tuple[int, int], patterns: Optional[PatternSet] = None
    ) -> TransactionType:
        debit_patterns = [CompiledPatterns.Keywords.DEBIT_PATTERN]
        credit_patterns = [CompiledPatterns.Keywords.CREDIT_PATTERN]
        if patterns is not None:
            if patterns.debit_keywords:
                debit_patterns.append(keyword_pattern(patterns.debit_keywords))
            if patterns.credit_keywords:
                credit_patterns.append(keyword_pattern(patterns.credit_keywords))

        debit = self._nearest(body, debit_patterns, amount_span)
        credit = self._nearest(body, credit_patterns, amount_span)

        # no verb at all, or both at the same distance
        if debit is not None and (credit is None or debit < credit):
            return TransactionType.DEBIT
        if credit is not None and (debit is None or credit < debit):
            return TransactionType.CREDIT
        return TransactionType.UNKNOWN

    @staticmethod
    def _nearest(body: str, keyword_patterns: List[re.Pattern], span: Tuple[int, int]) -> Optional[int]:
        distances = [_distance(m, span) for p in keyword_patterns for m in p.finditer(body)]
        return min(distances) if distances else None

    # -------------------------------------------------------------------------
    # extract_merchant
    # -------------------------------------------------------------------------
    def extract_merchant(self, body: str, patterns: Optional[PatternSet] = None) -> Optional[str]:
        override = patterns.merchant if patterns else None
        for m in self._matches(body, override, CompiledPatterns.Merchant.ALL_PATTERNS, all_matches=True):
            raw = (first_group(m) or "").strip()
            if not raw or CompiledPatterns.Merchant.NOT_A_PAYEE.match(raw):
                continue
            name = normalize_merchant_name(raw)
            if is_valid_merchant_name(name):
                return name
        return None

    # -------------------------------------------------------------------------
    # extract_reference
    # -------------------------------------------------------------------------
    def extract_reference(self, body: str, patterns: Optional[PatternSet] = None) -> Optional[str]:
        override = patterns.reference if patterns else None
        for m in self._matches(body, override, CompiledPatterns.Reference.ALL_PATTERNS, all_matches=True):
            token = (first_group(m) or "").strip()
            if self._is_valid_reference(token):
                return token
        return None

    @staticmethod
    def _is_valid_reference(token: str) -> bool:
        return (
            Constants.Parsing.MIN_REFERENCE_LENGTH <= len(token) <= Constants.Parsing.MAX_REFERENCE_LENGTH
            and any(c.isdigit() for c in token)
        )

    # -------------------------------------------------------------------------
    # extract_account_number
    # -------------------------------------------------------------------------
    def extract_account_number(self, body: str) -> Optional[str]:
        for pattern in CompiledPatterns.Account.ALL_PATTERNS:
            m = pattern.search(body)
            if m:
                return m.group(1)[-4:]
        return None

    # -------------------------------------------------------------------------
    # extract_balance
    # -------------------------------------------------------------------------
    def extract_balance(self, body: str, patterns: Optional[PatternSet] = None) -> Optional[Decimal]:
        override = patterns.balance if patterns else None
        for m in self._matches(body, override, CompiledPatterns.Balance.ALL_PATTERNS):
            value = _amount_value(first_group(m))
            if value is not None:
                return value
        return None

    # -------------------------------------------------------------------------
    # extract_date
    # -------------------------------------------------------------------------
    def extract_date(self, message: RawMessage, patterns: Optional[PatternSet] = None) -> Optional[int]:
        if message.timestamp and message.timestamp > 0:
            return message.timestamp
        override = patterns.date if patterns else None
        for m in self._matches(message.body or "", override, CompiledPatterns.Date.ALL_PATTERNS):
            parsed = parse_date_text(first_group(m))
            if parsed is not None and parsed > 0:
                return parsed
        return None

    # -------------------------------------------------------------------------
    # UPI, payment method, location
    # -------------------------------------------------------------------------
    def extract_upi_id(self, body: str) -> Optional[str]:
        for pattern in CompiledPatterns.Vpa.ALL_PATTERNS:
            m = pattern.search(body)
            if m:
                return m.group(1).lower()
        return None

    def detect_payment_method(self, body: str, upi_id: Optional[str] = None) -> Optional[PaymentMethod]:
        if upi_id or CompiledPatterns.PaymentMethod.UPI.search(body):
            return PaymentMethod.UPI
        if CompiledPatterns.PaymentMethod.ATM.search(body):
            return PaymentMethod.ATM
        if CompiledPatterns.PaymentMethod.CARD.search(body):
            return PaymentMethod.CARD
        if CompiledPatterns.PaymentMethod.NET_BANKING.search(body):
            return PaymentMethod.NET_BANKING
        return None

    def extract_location(self, body: str) -> Optional[str]:
        for pattern in CompiledPatterns.Location.ALL_PATTERNS:
            m = pattern.search(body)
            if m:
                location = CompiledPatterns.Cleaning.MULTI_SPACE.sub(" ", m.group(1)).strip(" ,.-")
                if location:
                    return location
        return None

    # -------------------------------------------------------------------------
    # helpers
    # -------------------------------------------------------------------------
    @staticmethod
    def _matches(
        body: str, override: Optional[re.Pattern], generic: List[re.Pattern], all_matches: bool = False
    ) -> Iterator[re.Match]:
        """Override matches first, then generic ones, in pattern order."""
        ordered = ([override] if override is not None else []) + list(generic)
        for pattern in ordered:
            if all_matches:
                yield from pattern.finditer(body)
            else:
                m = pattern.search(body)
                if m:
                    yield m

    @staticmethod
    def _failure(message: RawMessage, reason: FailureReason, detail: str) -> ParseFailure:
        logger.debug("Could not parse sms %s from %s: %s", message.id, message.sender_address, reason.value)
        return ParseFailure(
            sms_id=message.id,
            sender_address=message.sender_address,
            body=message.body or "",
            timestamp=message.timestamp,
            reason=reason,
            detail=detail,
        )
