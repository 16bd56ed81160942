"""Exceptions raised by the parsing library"""


class SmsParserError(Exception):
    """Base exception for the sms_parser package"""

    pass


class RegistryFrozenError(SmsParserError):
    """A bank was registered after the registry had been frozen"""

    pass


class DuplicateSenderIdError(SmsParserError):
    """A sender id is already owned by another bank (strict registries only)"""

    def __init__(self, sender_id: str, existing_bank: str, new_bank: str):
        self.sender_id = sender_id
        self.existing_bank = existing_bank
        self.new_bank = new_bank
        super().__init__(
            f"Sender id {sender_id!r} already registered to {existing_bank!r}, "
            f"cannot register it for {new_bank!r}"
        )


class InvalidTransactionError(SmsParserError):
    """Transaction values violate a model constraint (e.g. negative amount)"""

    pass


class DetectionCancelled(SmsParserError):
    """Recurring detection was stopped by the caller between merchant groups"""

    pass
