# app/modules/transactions/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from decimal import Decimal
from typing import List, Optional
import logging

from app.core.exceptions import PersistenceError
from app.shared.database.models import TransactionHistory, Driver

logger = logging.getLogger(__name__)

class TransactionsRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: str) -> List[TransactionHistory]:
        """All ledger rows of a user, newest first"""
        try:
            return (
                self.db.query(TransactionHistory)
                .filter(TransactionHistory.user_id == user_id)
                .order_by(desc(TransactionHistory.trans_date), desc(TransactionHistory.id))
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error fetching transaction history for {user_id}: {e}")
            raise PersistenceError("Failed to fetch transaction history")

    def get_balance(self, user_id: str) -> Optional[Decimal]:
        try:
            driver = self.db.query(Driver).filter(Driver.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching balance for {user_id}: {e}")
            raise PersistenceError("Failed to fetch balance")
        return driver.saldo if driver else None
