"""Project service: CRUD over user projects."""
from typing import Any, Dict, Optional
import logging

from sqlmodel import Session, select

from seaward.models.project import UserProject
from seaward.models.session import ProjectSession
from seaward.models.types import utc_now
from seaward.services.pagination import paginate, DEFAULT_LIMIT
from seaward.services.session_service import SessionService

logger = logging.getLogger(__name__)


class ProjectService:
    """Service class for user projects."""

    def __init__(self, db: Session):
        self.db = db

    def create_project(self, user_id: str, data: Dict[str, Any]) -> Optional[UserProject]:
        """Create a project owned by `user_id`."""
        try:
            project = UserProject(user_id=user_id, **data)
            self.db.add(project)
            self.db.commit()
            self.db.refresh(project)
            logger.info(f"Created project {project.id} for user {user_id}")
            return project
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating project: {str(e)}")
            return None

    def get_project(self, project_id: str) -> Optional[UserProject]:
        try:
            return self.db.get(UserProject, project_id)
        except Exception as e:
            logger.error(f"Error fetching project with ID {project_id}: {str(e)}")
            return None

    def update_project(self, project_id: str, data: Dict[str, Any]) -> Optional[UserProject]:
        try:
            project = self.db.get(UserProject, project_id)
            if not project:
                logger.error(f"Project with ID {project_id} not found")
                return None
            for key, value in data.items():
                setattr(project, key, value)
            project.updated_at = utc_now()
            self.db.add(project)
            self.db.commit()
            self.db.refresh(project)
            return project
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating project with ID {project_id}: {str(e)}")
            return None

    def delete_project(self, project_id: str) -> bool:
        """Delete a project and, first, each of its sessions."""
        try:
            project = self.db.get(UserProject, project_id)
            if not project:
                logger.error(f"Project with ID {project_id} not found")
                return False

            session_ids = list(self.db.exec(
                select(ProjectSession.id).where(ProjectSession.project_id == project_id)
            ).all())
            session_service = SessionService(self.db)
            for session_id in session_ids:
                if not session_service.delete_session(session_id):
                    logger.error(f"Project {project_id} kept: session {session_id} could not be deleted")
                    return False

            project = self.db.get(UserProject, project_id)
            self.db.delete(project)
            self.db.commit()
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting project with ID {project_id}: {str(e)}")
            return False

    def find_projects(
        self,
        user_id: Optional[str] = None,
        sort: Optional[str] = "-updatedAt",
        limit: int = DEFAULT_LIMIT,
        page: int = 1
    ) -> Optional[Dict[str, Any]]:
        try:
            statement = select(UserProject)
            if user_id:
                statement = statement.where(UserProject.user_id == user_id)
            return paginate(self.db, statement, UserProject, sort=sort, limit=limit, page=page)
        except Exception as e:
            logger.error(f"Error finding projects: {str(e)}")
            return None
