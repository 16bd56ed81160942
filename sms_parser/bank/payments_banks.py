"""Payments banks and wallets licensed as banks."""

from .bank_config import BankConfig, PatternSet, pattern

PAYTM = BankConfig(
    bank_name="Paytm Payments Bank",
    display_name="Paytm",
    sender_ids=(
        "VM-PAYTMB", "AD-PYTMWL", "PAYTMB", "PAYTM", "PaytmB",
        "Paytm", "PYTMWL", "VM-PAYTM", "AD-PAYTMB", "PAYTMUPI",
    ),
)
PAYTM_PATTERNS = PatternSet(
    balance=pattern(r"(?:Updated\s+)?Wallet\s+Bal(?:ance)?\s*(?:is\s*)?:?\s*(?:Rs\.?|INR|₹)\s*(\d[\d,]*(?:\.\d{1,2})?)"),
    reference=pattern(r"(?:Paytm\s+)?Txn\s*ID:?\s*([A-Za-z0-9]+)"),
)

AIRTEL = BankConfig(
    bank_name="Airtel Payments Bank",
    display_name="Airtel",
    sender_ids=(
        "VM-AIRTEL", "AD-AIRTPB", "AIRTPB", "AIRTEL", "AIRTELB",
        "AIRTELPB", "AIRTELUPI", "AIRTELMB", "VM-AIRTPB", "AD-AIRTEL",
    ),
)

JIO = BankConfig(
    bank_name="Jio Payments Bank",
    display_name="Jio",
    sender_ids=(
        "VM-JIOMNY", "AD-JIOMNY", "JIOMNY", "JIOPAY", "JioMoney",
        "JIOUPI", "JIOMB", "VM-JIOPAY", "AD-JIOPAY", "JIOBK",
    ),
)

IPPB = BankConfig(
    bank_name="India Post Payments Bank",
    display_name="IPPB",
    sender_ids=(
        "VM-IPPBSM", "AD-IPPBSM", "IPPBSM", "IPPB", "POSTBK",
        "IPPBUPI", "IPPBMB", "INDIAPOST", "POSTBANK", "VM-IPPB",
    ),
)

FINO = BankConfig(
    bank_name="Fino Payments Bank",
    display_name="Fino",
    sender_ids=(
        "VM-FINOPB", "AD-FINOPB", "FINOPB", "FINO", "FINOBANK",
        "FINOUPI", "FINOMB", "VM-FINO", "AD-FINO", "FINOPAY",
    ),
)


PAYMENTS_BANKS = [
    (PAYTM, PAYTM_PATTERNS),
    (AIRTEL, None),
    (JIO, None),
    (IPPB, None),
    (FINO, None),
]
