"""Project router: a user's projects and the sessions inside them."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlmodel import Session

from seaward.db.config import get_session
from seaward.middleware.auth import get_current_user
from seaward.models.user import User
from seaward.routers.access import get_owned_project
from seaward.schemas.common import Paginated
from seaward.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate, SessionCreate, SessionRead
from seaward.services.project_service import ProjectService
from seaward.services.session_service import SessionService

router = APIRouter(prefix="/projects", tags=["Projects"])


def _page_or_error(page: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if page is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not list documents, check the sort field"
        )
    return page


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    """Create a project owned by the authenticated user."""
    project = ProjectService(db).create_project(current_user.id, project_data.model_dump())
    if not project:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create project"
        )
    return project


@router.get("", response_model=Paginated[ProjectRead])
async def list_projects(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
    sort: str = Query("-updatedAt", description="Sort field, prefix with '-' for descending"),
    limit: int = Query(10, ge=0, description="Page size, 0 for all"),
    page: int = Query(1, ge=1),
):
    """List the authenticated user's projects."""
    return _page_or_error(ProjectService(db).find_projects(current_user.id, sort=sort, limit=limit, page=page))


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    """Get a project with its sessions."""
    project = get_owned_project(db, project_id, current_user)
    result = ProjectRead.model_validate(project)
    result.project_sessions = [SessionRead.model_validate(s) for s in project.sessions]
    return result


@router.patch("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    get_owned_project(db, project_id, current_user)
    project = ProjectService(db).update_project(project_id, project_data.model_dump(exclude_unset=True))
    if not project:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update project"
        )
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    """Delete a project together with its sessions and their messages."""
    get_owned_project(db, project_id, current_user)
    if not ProjectService(db).delete_project(project_id):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete project"
        )
    return None


@router.post("/{project_id}/sessions", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
async def create_session(
    project_id: str,
    session_data: Optional[SessionCreate] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
):
    get_owned_project(db, project_id, current_user)
    data = session_data.model_dump(exclude_unset=True) if session_data else {}
    project_session = SessionService(db).create_session_for_project(project_id, data)
    if not project_session:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create session"
        )
    return project_session


@router.get("/{project_id}/sessions", response_model=Paginated[SessionRead])
async def list_sessions(
    project_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_session),
    sort: str = Query("-updatedAt"),
    limit: int = Query(10, ge=0),
    page: int = Query(1, ge=1),
):
    """List a project's sessions, most recently active first."""
    get_owned_project(db, project_id, current_user)
    return _page_or_error(SessionService(db).find_sessions(project_id, sort=sort, limit=limit, page=page))
