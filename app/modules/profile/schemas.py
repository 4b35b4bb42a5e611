# app/modules/profile/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from decimal import Decimal
from datetime import datetime
from app.shared.schemas.common import BaseResponse

class DriverProfile(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    license_number: Optional[str] = None
    balance: Decimal = Decimal("0")
    role_description: Optional[str] = None
    status: Optional[str] = None
    selfie_url: Optional[str] = None
    source: Literal["drivers", "users"] = "drivers"

    class Config:
        json_encoders = {
            Decimal: lambda v: float(v)
        }

class PaymentRead(BaseModel):
    id: int
    payment_type: Optional[str] = None
    amount: Decimal
    description: Optional[str] = None
    booking_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        json_encoders = {
            Decimal: lambda v: float(v)
        }

class ProfileResponse(BaseResponse):
    profile: DriverProfile
    balance_history: List[PaymentRead] = Field(default_factory=list)
