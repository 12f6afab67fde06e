"""Session message router."""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlmodel import Session

from seaward.db.config import get_session
from seaward.middleware.auth import get_current_user
from seaward.models.user import User
from seaward.routers.access import get_owned_message, get_owned_session
from seaward.schemas.common import Paginated
from seaward.schemas.message import MessageCreate, MessageRead, MessageUpdate
from seaward.services.message_service import MessageService, message_to_dict

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post("", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def create_message(
    message_data: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    """Add a message to a session; the id is generated."""
    get_owned_session(db, message_data.project_session, current_user)
    data = message_data.model_dump(mode="json", exclude_unset=True)
    message = MessageService(db).create_message(
        role=data["role"],
        parts=data["parts"],
        project_session=data["project_session"],
        metadata=data.get("metadata"),
    )
    if not message:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create message"
        )
    return message_to_dict(message)


@router.get("", response_model=Paginated[MessageRead])
async def list_messages(
    session_id: str = Query(..., description="Session whose messages to list"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
    sort: str = Query("createdAt"),
    limit: int = Query(10, ge=0),
    page: int = Query(1, ge=1),
):
    get_owned_session(db, session_id, current_user)
    result = MessageService(db).find_messages(session_id, sort=sort, limit=limit, page=page)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not list documents, check the sort field"
        )
    result["docs"] = [message_to_dict(message) for message in result["docs"]]
    return result


@router.get("/{message_id}", response_model=MessageRead)
async def get_message(
    message_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    return message_to_dict(get_owned_message(db, message_id, current_user))


@router.patch("/{message_id}", response_model=MessageRead)
async def update_message(
    message_id: str,
    message_data: MessageUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    """Change role, parts or metadata of a message."""
    get_owned_message(db, message_id, current_user)
    message = MessageService(db).update_message(
        message_id, message_data.model_dump(mode="json", exclude_unset=True)
    )
    if not message:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update message"
        )
    return message_to_dict(message)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    get_owned_message(db, message_id, current_user)
    if not MessageService(db).delete_message(message_id):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete message"
        )
    return None
