"""Authentication router: sign-up, sign-in and the current user."""
from datetime import datetime, timedelta, timezone
import logging

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from seaward.config import JWT_ALGORITHM, SEAWARD_AUTH_SECRET, TOKEN_EXPIRATION_SECONDS
from seaward.db.config import get_session
from seaward.middleware.auth import get_current_user
from seaward.models.user import User
from seaward.schemas.auth import SignInRequest, SignUpRequest, TokenResponse
from seaward.schemas.common import ActionResult
from seaward.schemas.user import UserRead
from seaward.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])  # No prefix since main.py adds /auth


def create_jwt_token(user_id: str, email: str) -> TokenResponse:
    now = datetime.now(timezone.utc)
    expire = now + timedelta(seconds=TOKEN_EXPIRATION_SECONDS)
    payload = {
        "sub": user_id,
        "email": email,
        "exp": expire,
        "iat": now,
    }
    token = jwt.encode(payload, SEAWARD_AUTH_SECRET, algorithm=JWT_ALGORITHM)
    return TokenResponse(token=token, user_id=user_id, email=email, exp=int(expire.timestamp()))


@router.post("/sign-up", response_model=TokenResponse)
async def sign_up(request: SignUpRequest, session: Session = Depends(get_session)):
    service = UserService(session)
    try:
        if service.get_by_email(request.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with this email already exists"
            )

        user = service.register(request.email, request.password, request.username)
        logger.info(f"Registered user {user.id}")
        return create_jwt_token(user.id, user.email)
    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create user: {str(e)}"
        )


@router.post("/sign-in", response_model=TokenResponse)
async def sign_in(request: SignInRequest, session: Session = Depends(get_session)):
    try:
        user = UserService(session).authenticate(request.email, request.password)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password"
            )
        return create_jwt_token(user.id, user.email)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Sign in failed: {str(e)}"
        )


@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    """The authenticated user."""
    return current_user


@router.post("/logout", response_model=ActionResult)
async def logout(current_user: User = Depends(get_current_user)):
    # Tokens are stateless; the client drops its copy
    logger.info(f"User {current_user.id} logged out")
    return ActionResult(success=True, message="Logged out")
