import pytest

from app.core.exceptions import NotFoundError, PersistenceError
from app.modules.notifications.repository import TransferRepository, BookingRepository
from app.modules.notifications.schemas import StatusGroup, TransferStatus
from tests.conftest import DRIVER_A, DRIVER_B


def test_active_group_only_pending_and_confirmed(seed):
    transfers = TransferRepository(seed).list_transfers(DRIVER_A, StatusGroup.ACTIVE)
    assert {t.id for t in transfers} == {1, 2}
    assert all(t.status in (TransferStatus.PENDING, TransferStatus.CONFIRMED) for t in transfers)


def test_history_group_only_completed_and_canceled(seed):
    transfers = TransferRepository(seed).list_transfers(DRIVER_A, "history")
    assert {t.id for t in transfers} == {3, 4}


def test_empty_result_is_not_an_error(seed):
    assert TransferRepository(seed).list_transfers(DRIVER_B, StatusGroup.ACTIVE) == []


def test_update_status_assigns_driver(seed):
    updated = TransferRepository(seed).update_status(5, TransferStatus.CONFIRMED, DRIVER_B)
    assert updated.status == TransferStatus.CONFIRMED
    assert updated.driver_id == DRIVER_B


def test_update_missing_transfer(seed):
    with pytest.raises(NotFoundError):
        TransferRepository(seed).update_status(999, TransferStatus.CANCELED)


def test_store_rejects_completed_without_driver(seed):
    repository = TransferRepository(seed)
    with pytest.raises(PersistenceError):
        repository.update_status(5, TransferStatus.COMPLETED)

    # Rolled back: the row is untouched and the session is usable again
    transfer = repository.get_transfer(5)
    assert transfer.status == TransferStatus.PENDING
    assert transfer.driver_id is None


def test_get_transfer_miss_returns_none(seed):
    assert TransferRepository(seed).get_transfer(42) is None


def test_overdue_candidates_need_outstanding_balance(seed):
    from datetime import datetime
    from decimal import Decimal
    from app.shared.database.models import Booking

    seed.add_all([
        Booking(id=1, code_booking="BK-1", user_id=DRIVER_A, end_date=datetime(2026, 10, 1),
                remaining_payments=Decimal("100000")),
        Booking(id=2, code_booking="BK-2", user_id=DRIVER_A, end_date=datetime(2026, 10, 1),
                remaining_payments=Decimal("0")),
        Booking(id=3, code_booking="BK-3", user_id=DRIVER_B, end_date=datetime(2026, 10, 1),
                remaining_payments=Decimal("5000")),
    ])
    seed.commit()

    bookings = BookingRepository(seed).list_overdue_candidates(DRIVER_A)
    assert [b.code_booking for b in bookings] == ["BK-1"]
