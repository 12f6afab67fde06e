"""Ownership checks shared by the project, session and message routers."""
from fastapi import HTTPException, status
from sqlmodel import Session

from seaward.models.message import SessionMessage
from seaward.models.project import UserProject
from seaward.models.session import ProjectSession
from seaward.models.user import User


def _can_access(project: UserProject, user: User) -> bool:
    return project.user_id == user.id or user.is_admin


def get_owned_project(db: Session, project_id: str, user: User) -> UserProject:
    """
    Load a project the user may see.

    Raises:
        HTTPException: 404 if missing or owned by someone else
    """
    project = db.get(UserProject, project_id)
    if not project or not _can_access(project, user):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


def get_owned_session(db: Session, session_id: str, user: User) -> ProjectSession:
    project_session = db.get(ProjectSession, session_id)
    if not project_session or not _can_access(project_session.project, user):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return project_session


def get_owned_message(db: Session, message_id: str, user: User) -> SessionMessage:
    message = db.get(SessionMessage, message_id)
    if not message or not _can_access(message.project_session.project, user):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    return message
