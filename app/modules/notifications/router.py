# app/modules/notifications/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_identity_resolver
from app.core.auth.identity import IdentityResolver
from .service import DriverNotificationsService
from .schemas import NotificationsPanelResponse, TransferActionResponse

router = APIRouter()

@router.get("", response_model=NotificationsPanelResponse)
async def get_notifications(
    history: bool = Query(False, description="Show completed/canceled transfers instead of pending/confirmed"),
    read: List[str] = Query(default=[], description="Reminder ids already read in this session"),
    identity: IdentityResolver = Depends(get_identity_resolver),
    db: Session = Depends(get_db)
):
    """
    Driver notifications for airport transfers

    **Includes:**
    - Transfers assigned to the driver (pending/confirmed, or completed/canceled in history mode)
    - Overdue-payment reminders derived from the driver's bookings
    - Unread reminder count; read state is kept by the client and replayed through `read`
    """
    service = DriverNotificationsService(db, identity, history_mode=history)
    await service.refresh()
    service.apply_read_state(read)
    return service.snapshot("Notifications loaded")

@router.post("/transfers/{transfer_id}/accept", response_model=TransferActionResponse)
async def accept_transfer(
    transfer_id: int = Path(..., description="Airport transfer ID"),
    identity: IdentityResolver = Depends(get_identity_resolver),
    db: Session = Depends(get_db)
):
    """
    Accept a pending transfer

    **Functionality:**
    - Resolves the calling driver from the session; nothing is written without one
    - Sets status to 'confirmed' and assigns the driver
    - Returns the refreshed panel

    **Concurrency:**
    - Two drivers accepting the same transfer: the last write wins
    - The loser sees the authoritative row on the refreshed panel
    """
    service = DriverNotificationsService(db, identity)
    return await service.accept(transfer_id)

@router.post("/transfers/{transfer_id}/decline", response_model=TransferActionResponse)
async def decline_transfer(
    transfer_id: int = Path(..., description="Airport transfer ID"),
    identity: IdentityResolver = Depends(get_identity_resolver),
    db: Session = Depends(get_db)
):
    """Set a transfer to 'canceled'"""
    service = DriverNotificationsService(db, identity)
    return await service.decline(transfer_id)

@router.post("/transfers/{transfer_id}/complete", response_model=TransferActionResponse)
async def complete_transfer(
    transfer_id: int = Path(..., description="Airport transfer ID"),
    identity: IdentityResolver = Depends(get_identity_resolver),
    db: Session = Depends(get_db)
):
    """
    Mark a transfer as 'completed'

    Re-completing an already completed transfer is accepted and changes nothing.
    """
    service = DriverNotificationsService(db, identity)
    return await service.complete(transfer_id)
