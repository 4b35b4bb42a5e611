# app/modules/profile/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_identity_resolver
from app.core.auth.identity import IdentityResolver
from .service import ProfileService
from .schemas import ProfileResponse

router = APIRouter()

@router.get("", response_model=ProfileResponse)
async def get_profile(
    user_id: Optional[str] = Query(None, description="Driver ID; defaults to the session user"),
    identity: IdentityResolver = Depends(get_identity_resolver),
    db: Session = Depends(get_db)
):
    """
    Driver profile

    **Includes:**
    - Personal and contact details, license number, balance
    - Balance history from payments, newest first
    - Falls back to the users table when the id is not a driver
    """
    service = ProfileService(db, identity)
    return await service.get_profile(user_id)
