import re
from functools import lru_cache
from typing import Tuple

_CURRENCY = r"(?:Rs\.?|INR|₹)"
_NUMBER = r"([0-9][0-9,]*(?:\.\d{1,2})?)(?!\.?\d)"

# Merchant phrases stop at these tokens
_MERCHANT_END = (
    r"(?=\s+(?:on|at|Ref|UPI|via|using|from|Avl|Bal|dated|thru|through|A/?c)\b"
    r"|\s+\d{1,2}[-/]"
    r"|\.(?:\s|$)|[,;:\n(]|\s+-\s|$)"
)
_NAME = r"([A-Za-z][A-Za-z0-9&'._\- ]*?)"

_UPI_HANDLES = (
    "ybl", "ibl", "axl", "okaxis", "okicici", "okhdfcbank", "okhdfc", "oksbi",
    "paytm", "ptyes", "ptsbi", "pthdfc", "ptaxis", "upi", "apl", "yapl",
    "axisbank", "axis", "axisb", "sbi", "icici", "hdfc", "hdfcbank", "kotak",
    "yesbank", "yes", "indus", "indusind", "idfcbank", "idfc", "rbl", "federal",
    "fbl", "pnb", "bob", "barodampay", "unionbank", "canara", "cbin", "aubank",
    "jupiteraxis", "fam", "slc", "naviaxis", "superyes", "freecharge",
    "mobikwik", "ikwik", "airtel", "jio", "postbank", "equitas", "dbs", "citi",
    "hsbc", "sc", "waicici", "wahdfcbank", "wasbi", "waaxis",
)


class CompiledPatterns:
    class Amount:
        # A single alternation so the first currency token in the body wins
        CURRENCY_AMOUNT = re.compile(r"(?<![A-Za-z])" + _CURRENCY + r"\s*" + _NUMBER, re.IGNORECASE)
        ALL_PATTERNS = [CURRENCY_AMOUNT]

    class Balance:
        AVAILABLE_BAL = re.compile(
            r"\b(?:Avl\.?\s*Bal(?:ance)?|Avail(?:able)?\.?\s*Bal(?:ance)?|Wallet\s+Bal(?:ance)?"
            r"|Updated\s+Bal(?:ance)?|Closing\s+Bal(?:ance)?|Remaining\s+Bal(?:ance)?)"
            r"\s*(?:is\s*)?[:\-]?\s*(?:" + _CURRENCY + r"\s*)?" + _NUMBER,
            re.IGNORECASE
        )
        PLAIN_BAL = re.compile(
            r"\bBal(?:ance)?\s*(?:is\s*)?[:\-]?\s*(?:" + _CURRENCY + r"\s*)?" + _NUMBER,
            re.IGNORECASE
        )
        ALL_PATTERNS = [AVAILABLE_BAL, PLAIN_BAL]

    class Reference:
        UPI_REF = re.compile(
            r"\bUPI\s*(?:Ref(?:erence)?|Txn|Transaction)\.?\s*(?:ID|No\.?|Number)?\s*[:#\-]?\s*([A-Za-z0-9]+)",
            re.IGNORECASE
        )
        APP_TXN_ID = re.compile(
            r"\b(?:Google\s*Ref\s*ID|PhonePe\s*Txn\s*ID|Paytm\s*Txn\s*ID)\s*[:#\-]?\s*([A-Za-z0-9]+)",
            re.IGNORECASE
        )
        UTR = re.compile(r"\bUTR\s*(?:No\.?)?\s*[:#\-]?\s*([A-Za-z0-9]+)", re.IGNORECASE)
        RRN = re.compile(r"\bRRN\s*(?:No\.?)?\s*[:#\-]?\s*([A-Za-z0-9]+)", re.IGNORECASE)
        TXN_ID = re.compile(
            r"\b(?:Txn|Transaction)\s*(?:ID|No\.?|Number|#)\s*[:#\-]?\s*([A-Za-z0-9]+)",
            re.IGNORECASE
        )
        GENERIC_REF = re.compile(
            r"\bRef(?:erence)?\.?\s*(?:No\.?|Number|ID|#)?\s*[:#\-]?\s*([A-Za-z0-9]+)",
            re.IGNORECASE
        )
        ALL_PATTERNS = [UPI_REF, APP_TXN_ID, UTR, RRN, TXN_ID, GENERIC_REF]

    class Account:
        MASKED_WITH_LABEL = re.compile(
            r"\b(?:A/?c|Acct?|Account|Card)\s*(?:No\.?)?\s*(?:ending\s*(?:with|in)?)?\s*[:\-]?\s*[Xx*]+\s*(\d{3,6})\b",
            re.IGNORECASE
        )
        ENDING_WITH = re.compile(r"\bending\s*(?:with|in)?\s*[:\-]?\s*[Xx*]*(\d{4})\b", re.IGNORECASE)
        BARE_MASKED = re.compile(r"(?<![A-Za-z0-9])[Xx*]{2,}(\d{3,6})\b")
        ALL_PATTERNS = [MASKED_WITH_LABEL, ENDING_WITH, BARE_MASKED]

    class Merchant:
        INFO = re.compile(
            r"\bInfo:\s*(?:UPI/(?:P2[AM]/)?(?:\d+/)?)?([^/\n.]+?)(?:/|\.(?:\s|$)|\n|$)",
            re.IGNORECASE
        )
        VPA_WITH_NAME = re.compile(r"\bVPA\s+[^@\s]+@[^\s(]+\s*\(([^)]+)\)", re.IGNORECASE)
        TO = re.compile(r"\bto\s+(?:VPA\s+)?" + _NAME + _MERCHANT_END, re.IGNORECASE)
        AT = re.compile(r"\bat\s+" + _NAME + _MERCHANT_END, re.IGNORECASE)
        VIA = re.compile(r"\bvia\s+" + _NAME + _MERCHANT_END, re.IGNORECASE)
        FROM = re.compile(r"\bfrom\s+(?:VPA\s+)?" + _NAME + _MERCHANT_END, re.IGNORECASE)
        ALL_PATTERNS = [INFO, VPA_WITH_NAME, TO, AT, VIA, FROM]

        # Candidates naming the customer's own account or a reference label, not a payee
        NOT_A_PAYEE = re.compile(
            r"^(?:your|ur|a/?c|acct?|account|card|self|upi|ref|rrn|utr)\b", re.IGNORECASE
        )

    class Location:
        ATM_AT_ON = re.compile(r"\bat\s+([A-Za-z0-9][A-Za-z0-9 ,./\-]*?)\s+on\s+\d", re.IGNORECASE)
        ATM_ID = re.compile(r"\bATM\s*(?:ID)?\s*[:\-]?\s*([A-Z0-9]{4,})\b")
        ALL_PATTERNS = [ATM_AT_ON, ATM_ID]

    class Vpa:
        KNOWN_HANDLE = re.compile(
            r"(?<![A-Za-z0-9._\-])([a-zA-Z0-9][a-zA-Z0-9._\-]{1,}@(?:" + "|".join(_UPI_HANDLES) + r"))\b",
            re.IGNORECASE
        )
        LABELLED = re.compile(r"\b(?:VPA|UPI\s*ID)\s*[:\-]?\s*([a-zA-Z0-9][a-zA-Z0-9._\-]*@[a-zA-Z]{2,})", re.IGNORECASE)
        ALL_PATTERNS = [KNOWN_HANDLE, LABELLED]

    class Cleaning:
        TRAILING_PARENTHESES = re.compile(r"\s*\(.*?\)\s*$")
        MULTI_SPACE = re.compile(r"\s+")
        REPEATED_PUNCT = re.compile(r"([.\-_])\1+")
        EDGE_PUNCT = re.compile(r"^[\s.,\-_'&]+|[\s.,\-_'&]+$")
        BUSINESS_SUFFIX = re.compile(
            r"\s+(?:PVT\.?\s*LTD\.?|PRIVATE\s+LIMITED|LTD\.?|LIMITED|INC\.?|CORP\.?|CO\.?)\s*$",
            re.IGNORECASE
        )
        VPA_SEPARATORS = re.compile(r"[._\-]+")
        DIGITS = re.compile(r"\d+")

    class Keywords:
        DEBIT = (
            "debited", "spent", "paid", "withdrawn", "sent",
            "deducted", "charged", "purchase", "transferred",
        )
        CREDIT = (
            "credited", "received", "deposited", "refund", "refunded",
            "cashback", "reversed",
        )
        DEBIT_PATTERN = re.compile(r"\b(?:" + "|".join(DEBIT) + r")\b", re.IGNORECASE)
        CREDIT_PATTERN = re.compile(r"\b(?:" + "|".join(CREDIT) + r")\b", re.IGNORECASE)

    class Filters:
        OTP = re.compile(r"\b(?:OTP|One\s*Time\s*Password|verification\s*code|CVV)\b", re.IGNORECASE)
        PROMOTION = re.compile(
            r"\b(?:offer|discount|pre-?approved|apply\s+now|click\s+here|win\b|voucher\s+code)",
            re.IGNORECASE
        )
        PAYMENT_REQUEST = re.compile(
            r"has\s+requested|payment\s+request|collect\s+request|requesting\s+payment"
            r"|requests\s+rs|ignore\s+if\s+already\s+paid",
            re.IGNORECASE
        )
        DUE_REMINDER = re.compile(
            r"\bis\s+due\b|min(?:imum)?\s+amount\s+due|in\s+arrears|is\s+overdue|ignore\s+if\s+paid"
            r"|pls\s+pay.*min\s+of",
            re.IGNORECASE
        )
        FUTURE_DEBIT = re.compile(
            r"will\s+be\s+(?:debited|deducted|charged)|is\s+scheduled|due\s+for\s+debit",
            re.IGNORECASE
        )
        MANDATE_SETUP = re.compile(
            r"mandate\s+(?:has\s+been\s+|is\s+)?(?:created|registered|set\s*up|successfully\s+registered)"
            r"|autopay\s+(?:has\s+been\s+|is\s+)?(?:set\s*up|activated|enabled)",
            re.IGNORECASE
        )
        ALL_PATTERNS = [OTP, PROMOTION, PAYMENT_REQUEST, DUE_REMINDER, FUTURE_DEBIT, MANDATE_SETUP]

        BALANCE_ENQUIRY = re.compile(r"\b(?:Avl|Available|Closing|Wallet)?\s*Bal(?:ance)?\b", re.IGNORECASE)

    class PaymentMethod:
        UPI = re.compile(r"\bUPI\b|\bVPA\b|@(?:ybl|ibl|axl|paytm|okaxis|okicici|okhdfcbank|oksbi|upi)\b", re.IGNORECASE)
        ATM = re.compile(r"\bATM\b|\bcash\s+withdrawal\b|\bwithdrawn\b", re.IGNORECASE)
        CARD = re.compile(
            r"\b(?:credit|debit)\s+card\b|\bcard\s*(?:no\.?\s*)?(?:ending|xx|\*|x\d)|\bPOS\b",
            re.IGNORECASE
        )
        NET_BANKING = re.compile(r"\b(?:NEFT|IMPS|RTGS|net\s*banking|netbanking)\b", re.IGNORECASE)

    class Date:
        NUMERIC = re.compile(r"\b(\d{1,2}[-/]\d{1,2}[-/](?:\d{4}|\d{2}))\b")
        MONTH_NAME = re.compile(
            r"\b(\d{1,2}[-\s]?(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*[-\s,]*(?:\d{4}|\d{2}))\b",
            re.IGNORECASE
        )
        ISO = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")
        ALL_PATTERNS = [NUMERIC, MONTH_NAME, ISO]

        FORMATS = (
            "%d-%m-%Y", "%d-%m-%y", "%d/%m/%Y", "%d/%m/%y",
            "%d-%b-%Y", "%d-%b-%y", "%d %b %Y", "%d %b %y", "%d%b%Y", "%d%b%y",
            "%d-%B-%Y", "%d %B %Y", "%Y-%m-%d",
        )


@lru_cache(maxsize=None)
def keyword_pattern(words: Tuple[str, ...]) -> re.Pattern:
    """Word-bounded alternation over ``words``, longest first."""
    ordered = sorted(words, key=len, reverse=True)
    return re.compile(r"\b(?:" + "|".join(re.escape(w) for w in ordered) + r")\b", re.IGNORECASE)
