"""Session router: a session, and the messages used to initialise a chat."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from seaward.db.config import get_session
from seaward.middleware.auth import get_current_user
from seaward.models.user import User
from seaward.routers.access import get_owned_session
from seaward.schemas.common import ActionResult
from seaward.schemas.message import SaveMessagesRequest, SessionMessagesResponse
from seaward.schemas.project import SessionRead, SessionUpdate
from seaward.services.session_service import SessionService

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("/{session_id}", response_model=SessionRead)
async def get_session_by_id(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    return get_owned_session(db, session_id, current_user)


@router.patch("/{session_id}", response_model=SessionRead)
async def update_session(
    session_id: str,
    session_data: SessionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    get_owned_session(db, session_id, current_user)
    project_session = SessionService(db).update_session(session_id, session_data.model_dump(exclude_unset=True))
    if not project_session:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update session"
        )
    return project_session


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    """Delete a session after deleting its messages."""
    get_owned_session(db, session_id, current_user)
    if not SessionService(db).delete_session(session_id):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete session"
        )
    return None


@router.get("/{session_id}/messages", response_model=SessionMessagesResponse, response_model_exclude_unset=True)
async def get_session_messages(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    """The session's messages as UI messages, oldest first."""
    get_owned_session(db, session_id, current_user)
    messages = SessionService(db).get_session_messages(session_id)
    if messages is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load session messages"
        )
    return {"messages": messages}


@router.put("/{session_id}/messages", response_model=ActionResult)
async def save_session_messages(
    session_id: str,
    request: SaveMessagesRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    """Upsert the given messages into the session; invalid entries are skipped."""
    get_owned_session(db, session_id, current_user)
    if not SessionService(db).save_session_messages(session_id, request.messages):
        return ActionResult(success=False, error="Some messages could not be saved")
    return ActionResult(success=True, message="Messages saved")
