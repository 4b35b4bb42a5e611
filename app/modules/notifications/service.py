# app/modules/notifications/service.py
from typing import Iterable, List, Optional
from datetime import datetime
from sqlalchemy.orm import Session
import logging

from app.core.auth.identity import IdentityResolver
from app.core.exceptions import PortalError, PersistenceError, UnexpectedError
from .repository import TransferRepository, BookingRepository
from .overdue import derive_overdue_messages, mark_as_read, unread_count
from .schemas import (
    TransferRead, TransferStatus, StatusGroup, OverdueMessage,
    NotificationsPanelResponse, TransferActionResponse
)

logger = logging.getLogger(__name__)

class DriverNotificationsService:
    """
    Airport-transfer panel of the current driver.

    Holds the view state (transfer list, overdue reminders, unread count) and
    runs the transfer workflow against it:

        pending --accept--> confirmed --complete--> completed
        pending --decline--> canceled

    Transitions are not guarded against their source status; the store
    decides. Every successful action patches the local entry first and then
    re-fetches the whole panel, so a lost race against another driver shows
    up on that re-fetch.
    """

    def __init__(
        self,
        db: Session,
        identity: IdentityResolver,
        history_mode: bool = False,
        now: Optional[datetime] = None
    ):
        self.db = db
        self.identity = identity
        self.history_mode = history_mode
        self.now = now
        self.transfers_repository = TransferRepository(db)
        self.bookings_repository = BookingRepository(db)

        self.driver_id: Optional[str] = None
        self.transfers: List[TransferRead] = []
        self.overdue_messages: List[OverdueMessage] = []
        self.unread_count = 0
        self.notice: Optional[str] = None

    @property
    def status_group(self) -> StatusGroup:
        return StatusGroup.HISTORY if self.history_mode else StatusGroup.ACTIVE

    # ---------------------------------------------------------------
    # Reads
    # ---------------------------------------------------------------

    async def refresh(self) -> NotificationsPanelResponse:
        """Reload transfers and overdue reminders for the calling driver"""
        try:
            driver = self.identity.resolve_driver_by_email()
            self.driver_id = driver.id

            self.transfers = self.transfers_repository.list_transfers(driver.id, self.status_group)
            logger.info(f"✈️ Airport transfers fetched for driver {driver.id}: {len(self.transfers)}")

            if not self.transfers:
                self.notice = (
                    "No airport transfer history found."
                    if self.history_mode
                    else "No pending transfers assigned to you."
                )
            else:
                self.notice = None

            self._load_overdue_messages(driver.id)
        except PortalError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error refreshing notifications: {e}")
            raise UnexpectedError()

        return self.snapshot("Notifications loaded")

    def _load_overdue_messages(self, driver_id: str) -> None:
        try:
            bookings = self.bookings_repository.list_overdue_candidates(driver_id)
        except PersistenceError as e:
            # Reminders are secondary; the transfer list still renders
            logger.error(f"Error fetching overdue messages: {e.detail}")
            self.overdue_messages = []
            self.unread_count = 0
            return

        self.overdue_messages = derive_overdue_messages(bookings, now=self.now)
        self.unread_count = unread_count(self.overdue_messages)

    def mark_message_as_read(self, message_id: str) -> None:
        self.overdue_messages = mark_as_read(self.overdue_messages, message_id)
        self.unread_count = unread_count(self.overdue_messages)

    def apply_read_state(self, read_ids: Iterable[str]) -> None:
        """Replay a client-held set of read reminder ids"""
        for message_id in read_ids:
            self.mark_message_as_read(message_id)

    # ---------------------------------------------------------------
    # Transitions
    # ---------------------------------------------------------------

    async def accept(self, transfer_id: int) -> TransferActionResponse:
        """Confirm a transfer and assign it to the calling driver"""
        # Identity first: nothing is written when the caller is unknown
        driver = self.identity.resolve_driver_by_email()
        logger.info(f"Accepting transfer {transfer_id} for driver {driver.id}")

        return await self._transition(
            transfer_id,
            TransferStatus.CONFIRMED,
            assignee_id=driver.id,
            message="Transfer accepted and driver assigned."
        )

    async def decline(self, transfer_id: int) -> TransferActionResponse:
        return await self._transition(
            transfer_id,
            TransferStatus.CANCELED,
            message="You have declined the airport transfer."
        )

    async def complete(self, transfer_id: int) -> TransferActionResponse:
        return await self._transition(
            transfer_id,
            TransferStatus.COMPLETED,
            message="Transfer completed."
        )

    async def _transition(
        self,
        transfer_id: int,
        new_status: TransferStatus,
        message: str,
        assignee_id: Optional[str] = None
    ) -> TransferActionResponse:
        if not self.transfers:
            self._load_current_transfers()

        try:
            updated = self.transfers_repository.update_status(transfer_id, new_status, assignee_id)
        except PortalError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error updating transfer {transfer_id}: {e}")
            raise UnexpectedError()

        logger.info(f"✅ Transfer {transfer_id} is now {updated.status.value}")

        self._reconcile(updated, new_status, assignee_id)
        try:
            await self.refresh()
        except PortalError as e:
            # The write stood; keep the patched list and report the re-fetch problem
            logger.warning(f"Re-fetch after transfer {transfer_id} update failed: {e.detail}")
            self.notice = str(e.detail)

        response = self.snapshot(message)
        return TransferActionResponse(**response.model_dump(), transfer=updated)

    def _load_current_transfers(self) -> None:
        """Best-effort load of the list the action is applied to"""
        try:
            driver = self.identity.resolve_driver_by_email()
            self.driver_id = driver.id
            self.transfers = self.transfers_repository.list_transfers(driver.id, self.status_group)
        except PortalError as e:
            logger.info(f"Current transfer list unavailable before update: {e.detail}")

    def _reconcile(
        self,
        updated: TransferRead,
        new_status: TransferStatus,
        assignee_id: Optional[str]
    ) -> None:
        """Patch the local entry so it reflects the write before the re-fetch"""
        patch = {"status": new_status}
        if assignee_id is not None:
            patch["driver_id"] = assignee_id

        if not any(item.id == updated.id for item in self.transfers):
            # Not loaded locally; the stored row stands in for the entry
            self.transfers = self.transfers + [updated]
            return

        self.transfers = [
            item.model_copy(update=patch) if item.id == updated.id else item
            for item in self.transfers
        ]

    def snapshot(self, message: str = "") -> NotificationsPanelResponse:
        return NotificationsPanelResponse(
            success=True,
            message=message,
            driver_id=self.driver_id,
            history_mode=self.history_mode,
            transfers=self.transfers,
            overdue_messages=self.overdue_messages,
            unread_count=self.unread_count,
            notice=self.notice
        )
