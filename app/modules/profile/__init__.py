from .router import router
from .service import ProfileService

__all__ = ["router", "ProfileService"]
