"""Card and neo-banking apps that send their own transaction alerts."""

from .bank_config import BankConfig

SLICE = BankConfig(
    bank_name="Slice",
    display_name="Slice",
    sender_ids=(
        "SLICE", "VM-SLICE", "AD-SLICE", "SLICECC", "SLICEPAY",
        "SLICECARD", "VM-SLICEC", "AD-SLICEC", "SLICEUPI", "SLICEMB",
    ),
)

ONECARD = BankConfig(
    bank_name="OneCard",
    display_name="OneCard",
    sender_ids=(
        "ONECARD", "VM-ONECD", "AD-ONECD", "ONECRD", "ONECARDCC",
        "ONECARDPAY", "VM-ONECRD", "AD-ONECRD", "ONECARDUPI", "ONECARDMB",
    ),
)

CRED = BankConfig(
    bank_name="CRED",
    display_name="CRED",
    sender_ids=(
        "CRED", "VM-CRED", "AD-CRED", "CREDPAY", "CREDAPP",
        "VM-CREDP", "AD-CREDP", "CREDCLUB", "CREDMINT", "CREDPMT",
    ),
)

FI = BankConfig(
    bank_name="Fi Money",
    display_name="Fi",
    sender_ids=(
        "FIMONEY", "VM-FIBNK", "AD-FIBNK", "FI", "FIUPI",
        "FIMB", "FICARD", "VM-FIMONY", "AD-FIMONY", "FIPAY",
    ),
)

JUPITER = BankConfig(
    bank_name="Jupiter",
    display_name="Jupiter",
    sender_ids=(
        "JUPITER", "VM-JUPBK", "AD-JUPBK", "JUPITERBK", "JUPUPI",
        "JUPMB", "JUPCARD", "VM-JUPTER", "AD-JUPTER", "JUPITERPAY",
    ),
)

NIYO = BankConfig(
    bank_name="Niyo",
    display_name="Niyo",
    sender_ids=(
        "NIYO", "VM-NIYO", "AD-NIYO", "NIYOBNK", "NIYOUPI",
        "NIYOMB", "NIYOCARD", "NIYOPAY", "VM-NIYOGL", "NIYOEQ",
    ),
)


FINTECH_BANKS = [
    (SLICE, None),
    (ONECARD, None),
    (CRED, None),
    (FI, None),
    (JUPITER, None),
    (NIYO, None),
]
