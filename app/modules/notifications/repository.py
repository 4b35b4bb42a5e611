# app/modules/notifications/repository.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError
from typing import List, Optional
import logging

from app.core.exceptions import NotFoundError, PersistenceError
from app.shared.database.models import AirportTransfer, Booking
from .schemas import (
    TransferRead, TransferStatus, BookingRead, StatusGroup, STATUS_GROUPS
)

logger = logging.getLogger(__name__)

class TransferRepository:
    """Query construction for airport transfers. No workflow logic lives here."""

    def __init__(self, db: Session):
        self.db = db

    def _to_schema(self, row: AirportTransfer) -> TransferRead:
        try:
            return TransferRead.model_validate(row)
        except ValidationError as e:
            logger.error(f"Malformed airport_transfer row {getattr(row, 'id', '?')}: {e}")
            raise PersistenceError(f"Malformed transfer record {getattr(row, 'id', '?')}")

    def list_transfers(self, driver_id: str, status_group: StatusGroup) -> List[TransferRead]:
        """Transfers of a driver restricted to one status group, in store order"""
        statuses = [s.value for s in STATUS_GROUPS[StatusGroup(status_group)]]
        try:
            rows = (
                self.db.query(AirportTransfer)
                .filter(
                    AirportTransfer.driver_id == driver_id,
                    AirportTransfer.status.in_(statuses)
                )
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Transfer fetch error for driver {driver_id}: {e}")
            raise PersistenceError("Failed to get airport transfers")

        return [self._to_schema(row) for row in rows]

    def get_transfer(self, transfer_id: int) -> Optional[TransferRead]:
        try:
            row = self.db.query(AirportTransfer).filter(AirportTransfer.id == transfer_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Transfer lookup error {transfer_id}: {e}")
            raise PersistenceError("Failed to get airport transfer")
        return self._to_schema(row) if row else None

    def update_status(
        self,
        transfer_id: int,
        new_status: TransferStatus,
        assignee_id: Optional[str] = None
    ) -> TransferRead:
        """Single-statement update by id, then reselect the row"""
        values = {AirportTransfer.status: TransferStatus(new_status).value}
        if assignee_id is not None:
            values[AirportTransfer.driver_id] = assignee_id

        try:
            updated = (
                self.db.query(AirportTransfer)
                .filter(AirportTransfer.id == transfer_id)
                .update(values, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to set transfer {transfer_id} to {new_status}: {e}")
            raise PersistenceError(f"Failed to update transfer {transfer_id}")

        if updated == 0:
            raise NotFoundError(f"Airport transfer {transfer_id} not found")

        self.db.expire_all()
        transfer = self.get_transfer(transfer_id)
        if transfer is None:
            # Deleted (or hidden by policy) between update and reselect
            raise NotFoundError(f"Airport transfer {transfer_id} not found")
        return transfer


class BookingRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_overdue_candidates(self, driver_id: str) -> List[BookingRead]:
        """Bookings of the driver that still have an outstanding balance"""
        try:
            rows = (
                self.db.query(Booking)
                .filter(Booking.user_id == driver_id, Booking.remaining_payments > 0)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error fetching overdue bookings for {driver_id}: {e}")
            raise PersistenceError("Failed to get bookings")

        try:
            return [BookingRead.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error(f"Malformed booking row for driver {driver_id}: {e}")
            raise PersistenceError("Malformed booking record")
