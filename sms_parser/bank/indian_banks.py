"""Scheduled commercial banks. Order matters: later entries win sender-id clashes."""

from .bank_config import BankConfig, PatternSet, pattern

_AMOUNT = r"(\d+(?:,\d{2,3})*(?:\.\d{1,2})?)(?!\.?\d)"

# ---- HDFC ----
HDFC = BankConfig(
    bank_name="HDFC Bank",
    display_name="HDFC",
    sender_ids=(
        "VM-HDFCBK", "AD-HDFCBK", "HDFCBK", "HDFCBank", "HDFCCC",
        "HDFC", "HDFCUPI", "VM-HDFCCC", "AD-HDFCCC", "HDFCMB",
    ),
)
HDFC_PATTERNS = PatternSet(
    balance=pattern(r"Avl\s+bal:?\s*(?:INR|Rs\.?)\s*" + _AMOUNT),
    merchant=pattern(
        r"VPA\s+[^@\s]+@[^\s(]+\s*\(([^)]+)\)"
        r"|Info:\s*(?:UPI/)?(?:P2[AM]/)?(?:\d+/)?([^/\.\n]+?)(?:/|$)"
    ),
    reference=pattern(r"UPI\s+Ref\s+No\.?\s*(\d{12})"),
)

# ---- SBI ----
SBI = BankConfig(
    bank_name="State Bank of India",
    display_name="SBI",
    sender_ids=(
        "VM-SBIINB", "AD-SBIBNK", "SBI", "SBIINB", "SBIPSG",
        "VM-SBICard", "AD-SBicrd", "SBIUPI", "SBMSMS", "VM-SBIATM",
    ),
)
SBI_PATTERNS = PatternSet(
    amount=pattern(r"(?:debited|credited)\s+by\s+(?:Rs\.?\s*)?" + _AMOUNT),
    merchant=pattern(r"(?:trf\s+to|transfer\s+from)\s+([^.\n]+?)\s+Ref"),
    reference=pattern(r"Ref\s*no\.?\s*(\d+)"),
    debit_keywords=("trf to",),
)

# ---- ICICI ----
ICICI = BankConfig(
    bank_name="ICICI Bank",
    display_name="ICICI",
    sender_ids=(
        "VM-ICICIB", "BZ-ICICIB", "ICICIB", "iMobile", "ICICIC",
        "ICICICC", "ICICIPB", "ICIUPI", "AD-ICICIB", "VM-ICIPRU",
    ),
)
ICICI_PATTERNS = PatternSet(
    amount=pattern(r"(?:debited|credited)\s+(?:with|for)\s+(?:Rs\.?|INR)\s*" + _AMOUNT),
    reference=pattern(r"RRN\s+([A-Za-z0-9]+)"),
)

# ---- Axis ----
AXIS = BankConfig(
    bank_name="Axis Bank",
    display_name="Axis",
    sender_ids=(
        "VM-AXISBK", "AD-AXISBK", "AXISBK", "AxisBank", "AXISBNK",
        "AXISCRD", "AXISUPI", "VM-AXISCB", "AD-AXISCB", "AXISMB",
    ),
)
AXIS_PATTERNS = PatternSet(
    amount=pattern(r"INR\s+" + _AMOUNT + r"\s+(?:debited|credited)"),
    merchant=pattern(r"UPI/P2[AM]/[^/]+/([^\n/]+?)(?:\s*Not you|\s*$)"),
)

# ---- Kotak ----
KOTAK = BankConfig(
    bank_name="Kotak Mahindra Bank",
    display_name="Kotak",
    sender_ids=(
        "VK-KOTAKB", "AD-KOTAKB", "KOTAKB", "Kotak", "KOTAK",
        "KOTAKCC", "KOTAKUPI", "VK-KOTAKC", "AD-KOTAKC", "KOTAKMB",
    ),
)

# ---- PNB ----
PNB = BankConfig(
    bank_name="Punjab National Bank",
    display_name="PNB",
    sender_ids=(
        "VM-PNBSMS", "AD-PNBANK", "PNBSMS", "PNBANK", "PNB",
        "PNBUPI", "PNBMB", "PNBCC", "PNBATM", "AD-PNBCRD",
    ),
)

# ---- Bank of Baroda ----
BOB = BankConfig(
    bank_name="Bank of Baroda",
    display_name="BoB",
    sender_ids=(
        "AD-BOBANK", "VM-BOBANK", "BOBANK", "BOBBNK", "BOB",
        "BOBUPI", "BOBMB", "BOBCC", "BOBATM", "AD-BOBCRD",
    ),
)

# ---- Canara ----
CANARA = BankConfig(
    bank_name="Canara Bank",
    display_name="Canara",
    sender_ids=(
        "VM-CANBNK", "AD-CANARA", "CANBNK", "CANARA", "CANARABANK",
        "CANBNKUPI", "CANBNKMB", "CANBNKCC", "CANBNKATM", "AD-CANBNK",
    ),
)
CANARA_PATTERNS = PatternSet(
    merchant=pattern(r"\sto\s+([^,]+?)(?:,\s*UPI|\s+UPI|\.|-Canara)"),
    balance=pattern(r"(?:Total\s+)?Avail\.?\s*bal\s+INR\s+" + _AMOUNT),
)

# ---- Union Bank ----
UNION = BankConfig(
    bank_name="Union Bank of India",
    display_name="Union Bank",
    sender_ids=(
        "VM-UBIONL", "AD-UBIONL", "UBIONL", "UNIONBK", "UNIONBNK",
        "UBIUPI", "UBIMB", "UBICC", "UBIATM", "AD-UNIONB",
    ),
)

# ---- IDBI ----
IDBI = BankConfig(
    bank_name="IDBI Bank",
    display_name="IDBI",
    sender_ids=(
        "VM-IDBIBK", "AD-IDBIBK", "IDBIBK", "IDBIBNK", "IDBI",
        "IDBIUPI", "IDBIMB", "IDBICC", "IDBIATM", "VM-IDBICC",
    ),
)

# ---- IDFC First ----
IDFC_FIRST = BankConfig(
    bank_name="IDFC First Bank",
    display_name="IDFC First",
    sender_ids=(
        "VM-IDFCFB", "AD-IDFCFB", "IDFCFB", "IDFCBNK", "IDFC",
        "IDFCUPI", "IDFCMB", "IDFCCC", "IDFCATM", "VM-IDFCCC",
    ),
)

# ---- Indian Bank ----
INDIAN_BANK = BankConfig(
    bank_name="Indian Bank",
    display_name="Indian Bank",
    sender_ids=(
        "VM-INBBNK", "AD-INBBNK", "INBBNK", "INDIANBK", "INDBNK",
        "INBUPI", "INBMB", "INBCC", "INBATM", "VM-INBCC",
    ),
)

# ---- IndusInd ----
# Shares INDBNK with Indian Bank; registered after it, so IndusInd owns it.
INDUSIND = BankConfig(
    bank_name="IndusInd Bank",
    display_name="IndusInd",
    sender_ids=(
        "VM-ILOANS", "AD-INDBNK", "INDBNK", "IndusInd", "INDUSIND",
        "INDUSUPI", "INDUSMB", "INDUSCC", "INDUSATM", "VM-INDBNK",
    ),
)

# ---- Yes Bank ----
YES = BankConfig(
    bank_name="Yes Bank",
    display_name="Yes Bank",
    sender_ids=(
        "VM-YESBNK", "AD-YESBNK", "YESBNK", "YESBANK", "YES",
        "YESUPI", "YESMB", "YESCC", "YESATM", "VM-YESCC",
    ),
)

# ---- Federal ----
FEDERAL = BankConfig(
    bank_name="Federal Bank",
    display_name="Federal Bank",
    sender_ids=(
        "VM-FEDBNK", "AD-FEDBNK", "FEDBNK", "FEDERALBK", "FEDERAL",
        "FEDUPI", "FEDMB", "FEDCC", "FEDATM", "VM-FEDCC",
    ),
)

# ---- Karnataka Bank ----
KARNATAKA = BankConfig(
    bank_name="Karnataka Bank",
    display_name="Karnataka Bank",
    sender_ids=(
        "VM-KTKBNK", "AD-KTKBNK", "KTKBNK", "KARBNK", "KTKBANK",
        "KTKUPI", "KTKMB", "KTKCC", "KTKATM", "VM-KTKCC",
    ),
)

# ---- South Indian Bank ----
SOUTH_INDIAN = BankConfig(
    bank_name="South Indian Bank",
    display_name="South Indian Bank",
    sender_ids=(
        "VM-SIBSMS", "AD-SIBBNK", "SIBSMS", "SIBANK", "SIB",
        "SIBUPI", "SIBMB", "SIBCC", "SIBATM", "VM-SIBCC",
    ),
)

# ---- RBL ----
RBL = BankConfig(
    bank_name="RBL Bank",
    display_name="RBL Bank",
    sender_ids=(
        "VM-RBLBNK", "AD-RBLBNK", "RBLBNK", "RBLBANK", "RBL",
        "RBLUPI", "RBLMB", "RBLCC", "RBLATM", "VM-RBLCC",
    ),
)

# ---- Bandhan ----
BANDHAN = BankConfig(
    bank_name="Bandhan Bank",
    display_name="Bandhan Bank",
    sender_ids=(
        "VM-BANDHN", "AD-BANDHN", "BANDHN", "BANDHAN", "BANDHANBK",
        "BANDUPI", "BANDMB", "BANDCC", "BANDATM", "VM-BANDCC",
    ),
)

# ---- Central Bank ----
CENTRAL = BankConfig(
    bank_name="Central Bank of India",
    display_name="Central Bank",
    sender_ids=(
        "VM-CNTBNK", "AD-CNTBNK", "CNTBNK", "CENBNK", "CBINDIA",
        "CBIUPI", "CBIMB", "CBICC", "CBIATM", "VM-CBICC",
    ),
)


INDIAN_BANKS = [
    (HDFC, HDFC_PATTERNS),
    (SBI, SBI_PATTERNS),
    (ICICI, ICICI_PATTERNS),
    (AXIS, AXIS_PATTERNS),
    (KOTAK, None),
    (PNB, None),
    (BOB, None),
    (CANARA, CANARA_PATTERNS),
    (UNION, None),
    (IDBI, None),
    (IDFC_FIRST, None),
    (INDIAN_BANK, None),
    (INDUSIND, None),
    (YES, None),
    (FEDERAL, None),
    (KARNATAKA, None),
    (SOUTH_INDIAN, None),
    (RBL, None),
    (BANDHAN, None),
    (CENTRAL, None),
]
