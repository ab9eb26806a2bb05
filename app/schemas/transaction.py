from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from app.services.categorizer import Category
from app.services.sms_patterns import GrammarType

class TransactionDirection(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"

class ParseFailure(str, Enum):
    INVALID_INPUT = "invalid_input"
    NO_MATCH = "no_match"
    INVALID_AMOUNT = "invalid_amount"
    INTERNAL_ERROR = "internal_error"

class ParsedTransaction(BaseModel):
    """Structured transaction extracted from a single bank SMS"""
    amount: float = Field(..., gt=0)
    direction: TransactionDirection
    category: Category
    description: str = Field(..., min_length=1)
    date: datetime
    account_number_masked: Optional[str] = None
    reference_id: Optional[str] = None
    merchant: Optional[str] = None
    bank_name: str
    grammar: GrammarType

    class Config:
        frozen = True

class ParseResult(BaseModel):
    transaction: Optional[ParsedTransaction] = None
    failure: Optional[ParseFailure] = None

    class Config:
        frozen = True

    @property
    def ok(self) -> bool:
        return self.transaction is not None

    @classmethod
    def success(cls, transaction: ParsedTransaction) -> "ParseResult":
        return cls(transaction=transaction)

    @classmethod
    def fail(cls, reason: ParseFailure) -> "ParseResult":
        return cls(failure=reason)

class TransactionResponse(BaseModel):
    id: str
    user_id: str
    amount: float
    type: TransactionDirection
    category: Category
    title: str
    date: datetime
    notes: Optional[str] = None
    tags: List[str] = []
    is_recurring: bool
    created_at: datetime

    class Config:
        from_attributes = True

class SMSParseRequest(BaseModel):
    # Optional so missing fields get the same 400 as empty ones
    message: Optional[str] = None
    sender: Optional[str] = None
    user_id: Optional[str] = None

class SMSParseResponse(BaseModel):
    success: bool
    message: str
    transaction: Optional[TransactionResponse] = None

class SMSPreviewResponse(BaseModel):
    parsed_successfully: bool
    failure: Optional[ParseFailure] = None
    transaction: Optional[ParsedTransaction] = None

class SampleParseResult(BaseModel):
    message: str
    sender: str
    parsed_successfully: bool
    failure: Optional[ParseFailure] = None
    transaction: Optional[ParsedTransaction] = None

class SMSTestResponse(BaseModel):
    message: str
    results: List[SampleParseResult]
