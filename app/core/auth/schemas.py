from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class UserLogin(BaseModel):
    """Login payload"""
    email: str = Field(..., description="User email")
    password: str = Field(..., min_length=6, description="User password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "driver@example.com",
                "password": "driver123"
            }
        }

class UserResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: str
    is_active: bool

    class Config:
        from_attributes = True

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

class SessionInfo(BaseModel):
    """Decoded session token"""
    user_id: str
    email: Optional[str] = None
    role: Optional[str] = None
    exp: Optional[datetime] = None
