# app/modules/profile/service.py
from typing import List, Optional
from decimal import Decimal
from sqlalchemy.orm import Session
from pydantic import ValidationError
import logging

from app.core.auth.identity import IdentityResolver
from app.core.exceptions import NotFoundError, PersistenceError
from app.shared.database.models import Driver, User
from .repository import ProfileRepository
from .schemas import DriverProfile, PaymentRead, ProfileResponse

logger = logging.getLogger(__name__)

DEFAULT_ROLE_DESCRIPTION = "Company Driver"

class ProfileService:
    def __init__(self, db: Session, identity: IdentityResolver):
        self.db = db
        self.identity = identity
        self.repository = ProfileRepository(db)

    async def get_profile(self, user_id: Optional[str] = None) -> ProfileResponse:
        """Driver profile with balance history; falls back to the users table"""
        resolved_id = self.identity.resolve_driver_id(user_id)

        driver = self.repository.get_driver(resolved_id)
        if driver is not None:
            profile = self._from_driver(driver)
        else:
            user = self.repository.get_user(resolved_id)
            if user is None:
                raise NotFoundError(f"No profile found for {resolved_id}")
            logger.info(f"Profile {resolved_id} not in drivers, using users table")
            profile = self._from_user(user)

        return ProfileResponse(
            success=True,
            message="Driver profile",
            profile=profile,
            balance_history=self._balance_history(resolved_id)
        )

    def _balance_history(self, driver_id: str) -> List[PaymentRead]:
        try:
            payments = self.repository.list_payments(driver_id)
            return [PaymentRead.model_validate(p) for p in payments]
        except (PersistenceError, ValidationError) as e:
            # The profile still renders without its history
            logger.error(f"Balance history unavailable for {driver_id}: {e}")
            return []

    @staticmethod
    def _from_driver(driver: Driver) -> DriverProfile:
        return DriverProfile(
            id=driver.id,
            name=driver.name,
            email=driver.email,
            phone=driver.phone_number,
            license_number=driver.license_number,
            balance=driver.saldo if driver.saldo is not None else Decimal("0"),
            role_description=driver.description or DEFAULT_ROLE_DESCRIPTION,
            status=driver.status,
            selfie_url=driver.selfie_url,
            source="drivers"
        )

    @staticmethod
    def _from_user(user: User) -> DriverProfile:
        return DriverProfile(
            id=user.id,
            name=user.full_name,
            email=user.email,
            phone=user.phone,
            role_description=DEFAULT_ROLE_DESCRIPTION,
            status="active" if user.is_active else "inactive",
            source="users"
        )
