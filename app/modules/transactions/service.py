# app/modules/transactions/service.py
from typing import List, Optional
from decimal import Decimal
from sqlalchemy.orm import Session
from pydantic import ValidationError
import logging
import math

from app.config.settings import settings
from app.core.auth.identity import IdentityResolver
from app.core.exceptions import PersistenceError
from app.shared.formatting import format_amount
from app.shared.schemas.common import PaginatedResponse
from .repository import TransactionsRepository
from .schemas import (
    TransactionRead, TransactionView, TransactionFilter,
    TransactionSummary, TransactionHistoryResponse
)

logger = logging.getLogger(__name__)

def matches_search(transaction: TransactionRead, search: str) -> bool:
    if not search:
        return True
    needle = search.lower()
    return any(
        needle in (value or "").lower()
        for value in (transaction.jenis_transaksi, transaction.code_booking, transaction.payment_method)
    )

def matches_filter(transaction: TransactionRead, active_filter: TransactionFilter) -> bool:
    if active_filter == TransactionFilter.INCOME:
        return transaction.nominal > 0
    if active_filter == TransactionFilter.EXPENSE:
        return transaction.nominal < 0
    if active_filter == TransactionFilter.TOPUP:
        return transaction.is_topup
    if active_filter == TransactionFilter.PAYMENT:
        return transaction.is_payment
    return True

def to_view(transaction: TransactionRead) -> TransactionView:
    if transaction.is_topup:
        category = "Top-up"
        display_amount = f"+ Rp {format_amount(transaction.nominal)}"
    else:
        category = "Payment"
        display_amount = f"- Rp {format_amount(abs(transaction.nominal))}"
    return TransactionView(**transaction.model_dump(), category=category, display_amount=display_amount)

def summarize(transactions: List[TransactionRead]) -> TransactionSummary:
    completed = [t for t in transactions if t.status == "completed"]
    return TransactionSummary(
        total_income=sum((t.nominal for t in completed if t.nominal > 0), Decimal("0")),
        total_expense=sum((abs(t.nominal) for t in completed if t.nominal < 0), Decimal("0")),
        total_transactions=len(transactions)
    )

def paginate(items: list, page: int, rows_per_page: int) -> PaginatedResponse:
    total = len(items)
    start = (page - 1) * rows_per_page
    return PaginatedResponse(
        items=items[start:start + rows_per_page],
        total=total,
        page=page,
        size=rows_per_page,
        pages=math.ceil(total / rows_per_page)
    )

class TransactionsService:
    def __init__(self, db: Session, identity: IdentityResolver):
        self.db = db
        self.identity = identity
        self.repository = TransactionsRepository(db)

    async def get_history(
        self,
        user_id: Optional[str] = None,
        search: str = "",
        active_filter: TransactionFilter = TransactionFilter.ALL,
        page: int = 1,
        rows_per_page: Optional[int] = None
    ) -> TransactionHistoryResponse:
        """Ledger rows of the driver: searched, filtered, summarised and paginated"""
        resolved_id = self.identity.resolve_driver_id(user_id)
        rows_per_page = rows_per_page or settings.default_rows_per_page

        logger.info(f"Fetching transaction history for user {resolved_id}")
        rows = self.repository.list_for_user(resolved_id)

        try:
            transactions = [TransactionRead.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error(f"Malformed transaction row for {resolved_id}: {e}")
            raise PersistenceError("Malformed transaction record")

        filtered = [
            t for t in transactions
            if matches_search(t, search) and matches_filter(t, active_filter)
        ]

        summary = summarize(transactions)
        summary.filtered_transactions = len(filtered)
        balance = self.repository.get_balance(resolved_id)
        if balance is not None:
            summary.current_balance = balance

        if not transactions:
            message = "No transactions found"
        elif search:
            message = f"Showing {len(filtered)} of {len(transactions)} transactions for \"{search}\""
        else:
            message = f"Showing {len(filtered)} of {len(transactions)} transactions"

        return TransactionHistoryResponse(
            success=True,
            message=message,
            user_id=resolved_id,
            search=search,
            filter=active_filter,
            summary=summary,
            transactions=paginate([to_view(t) for t in filtered], page, rows_per_page)
        )
