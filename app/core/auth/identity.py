# app/core/auth/identity.py
from typing import Optional
import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.auth.schemas import SessionInfo
from app.core.exceptions import AuthenticationError, NotFoundError, PersistenceError
from app.shared.database.models import Driver

logger = logging.getLogger(__name__)

class IdentityResolver:
    """
    Resolves which driver is calling.

    Two paths exist: an identifier supplied by the caller (or taken from the
    session), and a lookup of the session email in the driver directory.
    """

    def __init__(self, db: Session, session: Optional[SessionInfo]):
        self.db = db
        self.session = session

    def resolve_driver_id(self, supplied_id: Optional[str] = None) -> str:
        if supplied_id:
            return supplied_id

        if self.session is None or not self.session.user_id:
            logger.info("No authenticated session available")
            raise AuthenticationError()

        return self.session.user_id

    def resolve_driver_by_email(self) -> Driver:
        """Driver whose email matches the session email, case-insensitively"""
        if self.session is None or not self.session.email:
            raise AuthenticationError()

        email = self.session.email.strip().lower()
        try:
            driver = (
                self.db.query(Driver)
                .filter(func.lower(Driver.email) == email)
                .first()
            )
        except SQLAlchemyError as e:
            logger.error(f"Driver lookup failed for {email}: {e}")
            raise PersistenceError("Driver lookup failed")

        if driver is None:
            logger.warning(f"No driver found for email: {email}")
            raise NotFoundError("Driver ID not found for current user")

        return driver
