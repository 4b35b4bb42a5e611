from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.shared.database.models import User
from app.core.auth.service import AuthService
from app.core.auth.schemas import SessionInfo
from app.core.auth.identity import IdentityResolver
from app.core.exceptions import AuthenticationError

security = HTTPBearer(auto_error=False)

def get_optional_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[SessionInfo]:
    """Decoded session, or None when no valid bearer token was sent"""
    if credentials is None:
        return None

    payload = AuthService.verify_token(credentials.credentials)
    if payload is None:
        return None

    try:
        return SessionInfo(**payload)
    except ValidationError:
        return None

def get_identity_resolver(
    session: Optional[SessionInfo] = Depends(get_optional_session),
    db: Session = Depends(get_db)
) -> IdentityResolver:
    return IdentityResolver(db, session)

async def get_current_user(
    session: Optional[SessionInfo] = Depends(get_optional_session),
    db: Session = Depends(get_db)
) -> User:
    """Current user from the session token"""
    if session is None:
        raise AuthenticationError("Invalid or expired token")

    user = db.query(User).filter(User.id == session.user_id).first()

    if user is None:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthenticationError("Inactive user")

    return user
