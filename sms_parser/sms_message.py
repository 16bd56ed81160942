from dataclasses import dataclass


@dataclass(frozen=True)
class RawMessage:
    """A single SMS as delivered by the inbox source.

    ``timestamp`` is epoch milliseconds. ``id`` must be stable across reads
    so that already stored messages can be recognised on the next sync.
    """

    id: int
    sender_address: str
    body: str
    timestamp: int
