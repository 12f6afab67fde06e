"""User router: profile updates and settings."""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlmodel import Session

from seaward.db.config import get_session
from seaward.middleware.auth import get_current_user, verify_user_access
from seaward.models.user import User
from seaward.schemas.common import ActionResult
from seaward.schemas.user import UserRead, UserUpdate
from seaward.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(session: Session = Depends(get_session)) -> UserService:
    """Dependency for getting UserService instance."""
    return UserService(session)


@router.patch("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update a user. Users may edit themselves; only admins edit others or change roles."""
    verify_user_access(user_id, current_user)
    data = user_data.model_dump(exclude_unset=True)
    if "role" in data and not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can change roles"
        )

    if not service.get_by_id(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    user = service.update_user(user_id, data)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user"
        )
    return user


@router.patch("/{user_id}/settings", response_model=ActionResult)
async def update_user_settings(
    user_id: str,
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Settings form endpoint; failures are reported in the body."""
    result = service.update_user_settings(current_user, user_id, user_data.model_dump(exclude_unset=True))
    if not result["success"]:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result)
    return result
