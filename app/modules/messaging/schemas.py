# app/modules/messaging/schemas.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union

class SendWhatsAppRequest(BaseModel):
    target: Union[List[Union[str, int, None]], str, int, None] = Field(None, description="One number or a list of numbers")
    message: str = Field("", description="Message text")

class SendWhatsAppResponse(BaseModel):
    """Always delivered with HTTP 200; outcome lives in `success`"""
    success: bool
    status: Optional[int] = None
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
