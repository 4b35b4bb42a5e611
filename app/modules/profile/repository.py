# app/modules/profile/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional
import logging

from app.core.exceptions import PersistenceError
from app.shared.database.models import Driver, User, Payment

logger = logging.getLogger(__name__)

class ProfileRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_driver(self, driver_id: str) -> Optional[Driver]:
        try:
            return self.db.query(Driver).filter(Driver.id == driver_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Driver fetch error {driver_id}: {e}")
            raise PersistenceError("Failed to load user profile")

    def get_user(self, user_id: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"User fetch error {user_id}: {e}")
            raise PersistenceError("Failed to load user profile")

    def list_payments(self, driver_id: str) -> List[Payment]:
        """Balance movements of a driver, newest first"""
        try:
            return (
                self.db.query(Payment)
                .filter(Payment.driver_id == driver_id)
                .order_by(desc(Payment.created_at), desc(Payment.id))
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error fetching balance history for {driver_id}: {e}")
            raise PersistenceError("Failed to load balance history")
