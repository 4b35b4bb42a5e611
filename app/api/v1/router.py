# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.modules.profile.router import router as profile_router
from app.modules.notifications.router import router as notifications_router
from app.modules.transactions.router import router as transactions_router
from app.modules.messaging.router import router as messaging_router

# Main v1 router
api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["authentication"])

api_router.include_router(
    profile_router,
    prefix="/profile",
    tags=["Driver Profile"]
)

api_router.include_router(
    notifications_router,
    prefix="/notifications",
    tags=["Driver Notifications"]
)

api_router.include_router(
    transactions_router,
    prefix="/transactions",
    tags=["Transaction History"]
)

api_router.include_router(
    messaging_router,
    prefix="/functions",
    tags=["Messaging"]
)

@api_router.get("/")
async def api_root():
    """API v1 root"""
    return {
        "message": "Driver Portal API v1",
        "status": "active",
        "docs": "/docs",
        "available_endpoints": {
            "authentication": "/api/v1/auth",
            "profile": "/api/v1/profile",
            "notifications": "/api/v1/notifications",
            "transactions": "/api/v1/transactions",
            "messaging": "/api/v1/functions/send-whatsapp"
        }
    }

@api_router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "Driver Portal API",
        "architecture": "modular_monolith",
        "modules": {
            "profile": {"status": "active", "features": ["Driver profile", "Balance history"]},
            "notifications": {
                "status": "active",
                "features": ["Airport transfers", "Accept / decline / complete", "Overdue reminders"]
            },
            "transactions": {"status": "active", "features": ["Search", "Filters", "Totals", "Pagination"]},
            "messaging": {"status": "active", "features": ["WhatsApp forwarding"]}
        }
    }
