# app/modules/transactions/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_identity_resolver
from app.core.auth.identity import IdentityResolver
from .service import TransactionsService
from .schemas import TransactionHistoryResponse, TransactionFilter

router = APIRouter()

@router.get("", response_model=TransactionHistoryResponse)
async def get_transaction_history(
    user_id: Optional[str] = Query(None, description="Driver ID; defaults to the session user"),
    search: str = Query("", description="Matches type, booking code or payment method"),
    filter: TransactionFilter = Query(TransactionFilter.ALL, description="all, income, expense, topup, payment"),
    page: int = Query(1, ge=1),
    rows_per_page: Optional[int] = Query(None, ge=1, le=100),
    identity: IdentityResolver = Depends(get_identity_resolver),
    db: Session = Depends(get_db)
):
    """
    Transaction history

    **Functionality:**
    - Ledger rows of the driver, newest first
    - Case-insensitive search and type/direction filters
    - Income and expense totals over completed rows
    - Pagination (resets to page 1 whenever search or filter changes on the client)
    """
    service = TransactionsService(db, identity)
    return await service.get_history(user_id, search, filter, page, rows_per_page)
