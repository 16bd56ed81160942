import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from .bank.bank_registry import BankRegistry, build_default_registry
from .config import Settings, get_settings
from .extractor import TransactionExtractor
from .parsed_transaction import ParseFailure
from .pipeline import InMemoryTransactionStore, SmsSyncPipeline
from .sms_message import RawMessage

logger = logging.getLogger(__name__)


class SMSRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="_id")
    date: int
    address: str
    body: str
    type: Optional[str] = None

    def to_message(self) -> RawMessage:
        return RawMessage(id=self.id, sender_address=self.address, body=self.body, timestamp=self.date)


class TransactionResponse(BaseModel):
    sms_id: int
    amount: str
    type: str
    date: int
    merchant: Optional[str] = None
    account_number: Optional[str] = None
    reference_number: Optional[str] = None
    balance_after: Optional[str] = None
    location: Optional[str] = None
    upi_id: Optional[str] = None
    payment_method: Optional[str] = None
    bank_name: Optional[str] = None
    sender_address: str
    transaction_id: str


class FailureResponse(BaseModel):
    sms_id: int
    sender_address: str
    reason: str
    detail: str = ""


class BatchResponse(BaseModel):
    total_messages: int
    bank_messages: int
    transactions: List[TransactionResponse]
    failures: List[FailureResponse]
    duplicates_dropped: int


class RecurringResponse(BaseModel):
    id: str
    type: str
    merchant: str
    transaction_type: str
    expected_amount: str
    amount_tolerance: str
    interval_days: float
    interval_tolerance_days: float
    frequency: str
    frequency_label: str
    last_seen_date: int
    next_expected_date: int
    member_transaction_ids: List[int]
    is_user_confirmed: bool
    is_dismissed: bool


class BankResponse(BaseModel):
    bank_name: str
    display_name: str
    sender_ids: List[str]
    has_overrides: bool


def create_app(settings: Optional[Settings] = None, registry: Optional[BankRegistry] = None) -> FastAPI:
    settings = settings or get_settings()
    registry = registry or build_default_registry()

    app = FastAPI(
        title="SMS Parser API",
        description="Parse bank SMS alerts into transactions and detect recurring payments.",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.registry = registry
    app.state.extractor = TransactionExtractor(registry)

    def _pipeline(request: Request) -> SmsSyncPipeline:
        # Each request works on its own throwaway store
        return SmsSyncPipeline.from_settings(
            request.app.state.settings, request.app.state.registry, InMemoryTransactionStore()
        )

    @app.get("/health")
    async def health(request: Request):
        return {"status": "healthy", "banks": request.app.state.registry.count()}

    @app.get("/banks", response_model=List[BankResponse])
    async def list_banks(request: Request):
        return [
            BankResponse(
                bank_name=entry.config.bank_name,
                display_name=entry.config.display_name,
                sender_ids=list(entry.config.sender_ids),
                has_overrides=entry.patterns is not None,
            )
            for entry in request.app.state.registry.all_banks()
        ]

    @app.post("/parse", response_model=TransactionResponse)
    async def parse_sms(sms: SMSRequest, request: Request):
        """
        Parse a single SMS. Unknown senders are parsed with the generic patterns.
        """
        result = request.app.state.extractor.parse_message(sms.to_message())
        if isinstance(result, ParseFailure):
            raise HTTPException(
                status_code=422,
                detail={"reason": result.reason.value, "message": result.detail},
            )
        return TransactionResponse(**result.to_dict())

    @app.post("/parse-batch", response_model=BatchResponse)
    async def parse_sms_batch(messages: List[SMSRequest], request: Request):
        """
        Classify, parse and deduplicate a batch of SMS in one request.
        """
        result = _pipeline(request).sync(m.to_message() for m in messages)
        return BatchResponse(
            total_messages=result.total_messages,
            bank_messages=result.bank_messages,
            transactions=[TransactionResponse(**t.to_dict()) for t in result.saved],
            failures=[FailureResponse(**f.to_dict()) for f in result.failures],
            duplicates_dropped=result.duplicates_dropped,
        )

    @app.post("/recurring", response_model=List[RecurringResponse])
    async def detect_recurring(messages: List[SMSRequest], request: Request):
        """
        Parse a message history and return the recurring patterns found in it.
        """
        pipeline = _pipeline(request)
        pipeline.sync(m.to_message() for m in messages)
        return [RecurringResponse(**p.to_dict()) for p in pipeline.refresh_recurring()]

    return app
