from .router import router
from .service import MessagingService

__all__ = ["router", "MessagingService"]
