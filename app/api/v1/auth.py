from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.service import AuthService
from app.core.auth.schemas import UserLogin, TokenResponse, UserResponse
from app.core.exceptions import AuthenticationError, ForbiddenError
from app.shared.database.models import User
from app.core.auth.dependencies import get_current_user

router = APIRouter()

def _authenticate(db: Session, email: str, password: str) -> User:
    user = db.query(User).filter(User.email == email).first()

    if not user or not AuthService.verify_password(password, user.password_hash):
        raise AuthenticationError("Incorrect email or password")

    if not user.is_active:
        raise ForbiddenError("Inactive user")

    return user

def _issue_token(user: User) -> TokenResponse:
    token_data = {
        "user_id": user.id,
        "email": user.email,
        "role": user.role
    }

    access_token = AuthService.create_access_token(data=token_data)

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )

@router.post("/login", response_model=TokenResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """
    Login endpoint returning a session token

    **Parameters:**
    - **username**: user email
    - **password**: user password
    """
    user = _authenticate(db, form_data.username, form_data.password)
    return _issue_token(user)

@router.post("/login-json", response_model=TokenResponse)
async def login_json(
    user_login: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Alternative login that accepts JSON

    **Body:**
    ```json
        {
            "email": "driver@example.com",
            "password": "driver123"
        }
    ```
    """
    user = _authenticate(db, user_login.email, user_login.password)
    return _issue_token(user)

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Current user information

    **Required headers:**
    - Authorization: Bearer {token}
    """
    return current_user

@router.post("/logout")
async def logout():
    """
    Logout (stateless JWT, informational only)

    The client must drop the token from its storage.
    """
    return {"message": "Logout successful. Remove the token on the client side."}
