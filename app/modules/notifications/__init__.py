# app/modules/notifications/__init__.py
"""
Notifications module - airport transfers for drivers

- Transfers assigned to the driver, split into active and history groups
- Accept / decline / complete workflow
- Overdue-payment reminders derived from bookings

Layout:
- router.py: HTTP endpoints
- service.py: view state and transfer workflow
- repository.py: data access for transfers and bookings
- overdue.py: reminder derivation
- schemas.py: request/response models
"""

from .router import router
from .service import DriverNotificationsService
from .repository import TransferRepository, BookingRepository

__all__ = [
    "router",
    "DriverNotificationsService",
    "TransferRepository",
    "BookingRepository"
]
