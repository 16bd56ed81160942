import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

_LEADING_NOISE = {"www", "http", "https"}
_TRAILING_NOISE = {
    # domain extensions
    "com", "net", "org", "in", "co", "io",
    # company forms
    "inc", "ltd", "pvt", "private", "limited", "llc", "llp", "corp", "plc", "gmbh", "sa", "ag",
}


def normalize(name: str) -> str:
    """
    Grouping key for a merchant name.

    'NETFLIX.COM', 'Netflix' and 'netflix com' all map to 'netflix';
    'Amazon Pay India Pvt Ltd' maps to 'amazon pay india'.
    """
    tokens = _NON_ALNUM.sub(" ", (name or "").lower()).split()
    while tokens and tokens[0] in _LEADING_NOISE:
        tokens.pop(0)
    while len(tokens) > 1 and tokens[-1] in _TRAILING_NOISE:
        tokens.pop()
    return " ".join(tokens)
