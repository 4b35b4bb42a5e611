from .router import router
from .service import TransactionsService

__all__ = ["router", "TransactionsService"]
