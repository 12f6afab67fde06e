"""
Project Session Service

CRUD for project sessions plus the two operations the chat flow relies on:
reading a session back as validated UI messages, and saving a turn's
messages with upsert semantics.

Every action logs and returns None/False on failure instead of raising.
"""

from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError
from sqlmodel import Session, select

from seaward.models.message import SessionMessage, parse_created_at
from seaward.models.project import UserProject
from seaward.models.session import ProjectSession
from seaward.models.types import utc_now
from seaward.schemas.ui_message import UIMessage
from seaward.services.pagination import paginate, DEFAULT_LIMIT

logger = logging.getLogger(__name__)


class SessionDeletionAborted(Exception):
    """Raised when a session's messages could not be looked up for deletion."""


class SessionService:
    """Service for managing project sessions and their messages"""

    def __init__(self, db: Session):
        self.db = db

    def create_session_for_project(
        self,
        project_id: str,
        session_data: Optional[Dict[str, Any]] = None
    ) -> Optional[ProjectSession]:
        """
        Create a new session and associate it with a project.

        The project is looked up first so a missing project never leaves an
        orphaned session behind.
        """
        session_data = dict(session_data or {})
        try:
            project = self.db.get(UserProject, project_id)
            if not project:
                logger.error(f"Project with ID {project_id} not found, session not created")
                return None

            new_session = ProjectSession(
                name=session_data.get("name") or f"Session {utc_now().isoformat()}",
                project_id=project.id,
            )
            self.db.add(new_session)
            project.updated_at = utc_now()
            self.db.commit()
            self.db.refresh(new_session)
            return new_session
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating session for project {project_id}: {str(e)}")
            return None

    def get_session(self, session_id: str) -> Optional[ProjectSession]:
        try:
            return self.db.get(ProjectSession, session_id)
        except Exception as e:
            logger.error(f"Error fetching session with ID {session_id}: {str(e)}")
            return None

    def update_session(self, session_id: str, data: Dict[str, Any]) -> Optional[ProjectSession]:
        try:
            project_session = self.db.get(ProjectSession, session_id)
            if not project_session:
                logger.error(f"Session with ID {session_id} not found")
                return None
            for key, value in data.items():
                setattr(project_session, key, value)
            project_session.updated_at = utc_now()
            self.db.add(project_session)
            self.db.commit()
            self.db.refresh(project_session)
            return project_session
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating session with ID {session_id}: {str(e)}")
            return None

    def _delete_session_messages(self, session_id: str) -> None:
        """
        Delete every message of a session, one at a time.

        A message that fails to delete is logged and skipped.

        Raises:
            SessionDeletionAborted: If the messages could not be looked up
        """
        logger.info(f"Attempting to delete session with ID: {session_id}")
        try:
            related_messages = list(self.db.exec(
                select(SessionMessage).where(SessionMessage.project_session_id == session_id)
            ).all())
        except Exception as e:
            logger.error(f"Error looking up messages of session {session_id}: {str(e)}")
            raise SessionDeletionAborted(
                f"Failed to delete downstream messages for session {session_id}. Session deletion aborted."
            ) from e

        if not related_messages:
            logger.info(f"No messages found to delete for session {session_id}.")
            return

        logger.info(f"Found {len(related_messages)} messages to delete for session {session_id}.")
        for message in related_messages:
            message_id = message.id
            try:
                self.db.delete(message)
                self.db.commit()
                logger.debug(f"Deleted message {message_id} for session {session_id}")
            except Exception as e:
                self.db.rollback()
                logger.error(f"Error deleting message {message_id} for session {session_id}: {str(e)}")
        logger.info(f"Finished deleting messages for session {session_id}.")

    def delete_session(self, session_id: str) -> bool:
        """Delete a session after its messages. False if anything failed."""
        try:
            project_session = self.db.get(ProjectSession, session_id)
            if not project_session:
                logger.error(f"Session with ID {session_id} not found")
                return False
            self._delete_session_messages(session_id)
            self.db.delete(project_session)
            self.db.commit()
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting session with ID {session_id}: {str(e)}")
            return False

    def find_sessions(
        self,
        project_id: Optional[str] = None,
        sort: Optional[str] = "-updatedAt",
        limit: int = DEFAULT_LIMIT,
        page: int = 1
    ) -> Optional[Dict[str, Any]]:
        try:
            statement = select(ProjectSession)
            if project_id:
                statement = statement.where(ProjectSession.project_id == project_id)
            return paginate(self.db, statement, ProjectSession, sort=sort, limit=limit, page=page)
        except Exception as e:
            logger.error(f"Error finding sessions: {str(e)}")
            return None

    def get_session_messages(self, session_id: str) -> Optional[List[Dict[str, Any]]]:
        """
        Fetch all messages of a session formatted for chat initialisation.

        Rows that no longer validate as UI messages are skipped with a warning.

        Returns:
            Validated UI messages ordered by creation time, or None on error
        """
        try:
            rows = self.db.exec(
                select(SessionMessage)
                .where(SessionMessage.project_session_id == session_id)
                .order_by(SessionMessage.created_at)
            ).all()
        except Exception as e:
            logger.error(f"Error fetching messages for session {session_id}: {str(e)}")
            return None

        formatted_messages = []
        for row in rows:
            candidate = {
                "id": row.id,
                "role": row.role or "assistant",
                "parts": row.parts or [],
            }
            if row.message_metadata is not None:
                candidate["metadata"] = row.message_metadata
            try:
                formatted_messages.append(UIMessage.model_validate(candidate).to_dict())
            except ValidationError as e:
                logger.warning(f"Message {row.id} failed validation: {e.errors()}")
        return formatted_messages

    def save_session_messages(self, session_id: str, messages: List[Dict[str, Any]]) -> bool:
        """
        Save or update messages for a session.

        Args:
            session_id: The session the messages belong to
            messages: UI messages (dicts); invalid entries are skipped

        Returns:
            True only if every message write and the session touch succeeded
        """
        success = True
        processed_ids: List[str] = []

        try:
            existing_session = self.db.get(ProjectSession, session_id)
        except Exception as e:
            logger.error(f"Error checking session existence for {session_id}: {str(e)}")
            return False
        if not existing_session:
            logger.error(f"Session with ID {session_id} not found. Cannot save messages.")
            return False

        for raw_message in messages:
            try:
                valid_message = UIMessage.model_validate(raw_message)
            except ValidationError as e:
                logger.warning(f"Skipping save for invalid message structure in session {session_id}: {e.errors()}")
                continue

            message_data = valid_message.to_dict()
            created_at = parse_created_at(raw_message.get("createdAt")) if isinstance(raw_message, dict) else None

            try:
                existing = self.db.exec(
                    select(SessionMessage).where(
                        SessionMessage.id == valid_message.id,
                        SessionMessage.project_session_id == session_id,
                    )
                ).first()

                if existing:
                    logger.debug(f"Updating existing message {valid_message.id}")
                    existing.role = message_data["role"]
                    existing.parts = message_data["parts"]
                    if "metadata" in message_data:
                        existing.message_metadata = message_data["metadata"]
                    if created_at:
                        existing.created_at = created_at
                    existing.updated_at = utc_now()
                    self.db.add(existing)
                else:
                    logger.debug(f"Creating new message with id: {valid_message.id}")
                    new_message = SessionMessage(
                        id=valid_message.id,
                        role=message_data["role"],
                        parts=message_data["parts"],
                        message_metadata=message_data.get("metadata"),
                        project_session_id=session_id,
                    )
                    if created_at:
                        new_message.created_at = created_at
                    self.db.add(new_message)

                self.db.commit()
                processed_ids.append(valid_message.id)
            except Exception as e:
                self.db.rollback()
                logger.error(f"Failed to save message {valid_message.id} for session {session_id}: {str(e)}")
                success = False

        if processed_ids:
            try:
                existing_session = self.db.get(ProjectSession, session_id)
                existing_session.updated_at = utc_now()
                self.db.add(existing_session)
                self.db.commit()
                logger.info(f"Session {session_id} saved {len(processed_ids)} messages")
            except Exception as e:
                self.db.rollback()
                logger.error(f"Failed to update session {session_id}: {str(e)}")
                success = False
        else:
            logger.info(f"Session {session_id} did not require an update.")

        return success
