"""JWT authentication dependency for FastAPI."""
from fastapi import HTTPException, Depends, status, Request
from jose import jwt, JWTError
from sqlmodel import Session

from seaward.config import SEAWARD_AUTH_SECRET, JWT_ALGORITHM
from seaward.db.config import get_session
from seaward.models.user import User


def decode_token(token: str) -> dict:
    """
    Decode and verify a bearer token.

    Raises:
        HTTPException: If the token is invalid, expired or has no subject
    """
    try:
        payload = jwt.decode(
            token,
            SEAWARD_AUTH_SECRET,
            algorithms=[JWT_ALGORITHM]
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing user ID",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


async def get_current_user(
    request: Request,
    db: Session = Depends(get_session)
) -> User:
    """
    Validate the JWT from the Authorization header and load its user.

    Args:
        request: FastAPI request object to extract Authorization header
        db: Database session

    Returns:
        The authenticated User

    Raises:
        HTTPException: 401 if the header or token is invalid or the user no longer exists
    """
    auth_header = request.headers.get("authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_token(auth_header[7:])

    user = db.get(User, payload["sub"])
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def verify_user_access(user_id: str, current_user: User) -> None:
    """
    Allow acting on `user_id` only as that user or as an admin.

    Raises:
        HTTPException: 403 otherwise
    """
    if user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this user's resources"
        )
