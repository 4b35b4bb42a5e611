# app/modules/transactions/schemas.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from decimal import Decimal
from datetime import datetime
from enum import Enum
from app.shared.schemas.common import BaseResponse, PaginatedResponse

class TransactionFilter(str, Enum):
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"
    TOPUP = "topup"
    PAYMENT = "payment"

class TransactionRead(BaseModel):
    """Ledger row with the display defaults of the history table"""
    id: int
    code_booking: str = "-"
    jenis_transaksi: str = "Unknown"
    keterangan: str = "Unknown"
    nominal: Decimal = Decimal("0")
    saldo_awal: Decimal = Decimal("0")
    saldo_akhir: Decimal = Decimal("0")
    trans_date: datetime = Field(default_factory=datetime.now)
    status: str = "pending"
    payment_method: str = "-"
    bank_name: str = "-"
    account_number: str = "-"
    account_holder_received: str = "-"
    reference_no: Optional[str] = None

    class Config:
        from_attributes = True
        json_encoders = {
            Decimal: lambda v: float(v)
        }

    @field_validator(
        "code_booking", "payment_method", "bank_name",
        "account_number", "account_holder_received", mode="before"
    )
    @classmethod
    def _dash_when_empty(cls, v):
        return v or "-"

    @field_validator("jenis_transaksi", "keterangan", mode="before")
    @classmethod
    def _unknown_when_empty(cls, v):
        return v or "Unknown"

    @field_validator("nominal", "saldo_awal", "saldo_akhir", mode="before")
    @classmethod
    def _zero_when_empty(cls, v):
        return v if v is not None else Decimal("0")

    @field_validator("status", mode="before")
    @classmethod
    def _pending_when_empty(cls, v):
        return v or "pending"

    @field_validator("trans_date", mode="before")
    @classmethod
    def _now_when_empty(cls, v):
        return v or datetime.now()

    @property
    def is_topup(self) -> bool:
        return "topup" in self.jenis_transaksi.lower()

    @property
    def is_payment(self) -> bool:
        return "payment" in self.jenis_transaksi.lower()

class TransactionView(TransactionRead):
    category: str
    display_amount: str

class TransactionSummary(BaseModel):
    current_balance: Decimal = Decimal("0")
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    total_transactions: int = 0
    filtered_transactions: int = 0

    class Config:
        json_encoders = {
            Decimal: lambda v: float(v)
        }

class TransactionHistoryResponse(BaseResponse):
    user_id: str
    search: str = ""
    filter: TransactionFilter = TransactionFilter.ALL
    summary: TransactionSummary
    transactions: PaginatedResponse
