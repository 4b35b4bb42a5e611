# app/modules/notifications/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from decimal import Decimal
from datetime import datetime, date
from enum import Enum
from app.shared.schemas.common import BaseResponse

class TransferStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELED = "canceled"

class StatusGroup(str, Enum):
    ACTIVE = "active"
    HISTORY = "history"

STATUS_GROUPS = {
    StatusGroup.ACTIVE: (TransferStatus.PENDING, TransferStatus.CONFIRMED),
    StatusGroup.HISTORY: (TransferStatus.COMPLETED, TransferStatus.CANCELED),
}

class TransferRead(BaseModel):
    id: int
    booking_code: str
    customer_name: Optional[str] = None
    pickup_location: str
    dropoff_location: str
    pickup_date: Optional[date] = None
    pickup_time: Optional[str] = None
    status: TransferStatus
    driver_id: Optional[str] = None
    price: Optional[Decimal] = None

    class Config:
        from_attributes = True
        json_encoders = {
            Decimal: lambda v: float(v)
        }

class BookingRead(BaseModel):
    id: int
    code_booking: str
    user_id: str
    end_date: Optional[datetime] = None
    remaining_payments: Decimal = Decimal("0")
    vehicle_name: Optional[str] = None

    class Config:
        from_attributes = True
        json_encoders = {
            Decimal: lambda v: float(v)
        }

class OverdueMessage(BaseModel):
    id: str
    message: str
    created_at: datetime
    is_read: bool = False
    type: Literal["overdue", "payment", "booking"] = "overdue"
    amount: Optional[Decimal] = None
    days_overdue: Optional[int] = None

    class Config:
        json_encoders = {
            Decimal: lambda v: float(v)
        }

class NotificationsPanelResponse(BaseResponse):
    driver_id: Optional[str] = None
    history_mode: bool = False
    transfers: List[TransferRead] = Field(default_factory=list)
    overdue_messages: List[OverdueMessage] = Field(default_factory=list)
    unread_count: int = 0
    notice: Optional[str] = Field(None, description="Informational text shown above the table")

class TransferActionResponse(NotificationsPanelResponse):
    transfer: TransferRead
