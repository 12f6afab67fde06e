"""
Session Message Service

CRUD operations for individual session messages.
"""

from typing import Any, Dict, Optional
import logging
import uuid

from pydantic import ValidationError
from sqlmodel import Session, select

from seaward.models.message import SessionMessage
from seaward.models.types import utc_now
from seaward.schemas.ui_message import UIMessage
from seaward.services.pagination import paginate, DEFAULT_LIMIT

logger = logging.getLogger(__name__)


def message_to_dict(message: SessionMessage) -> Dict[str, Any]:
    """Serialise a stored message with its session link."""
    return {
        "id": message.id,
        "role": message.role,
        "parts": message.parts,
        "metadata": message.message_metadata,
        "project_session": message.project_session_id,
        "created_at": message.created_at,
        "updated_at": message.updated_at,
    }


class MessageService:
    """Service for session messages"""

    def __init__(self, db: Session):
        self.db = db

    def create_message(
        self,
        role: str,
        parts: list,
        project_session: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Optional[SessionMessage]:
        """Create a message with a generated id. None if invalid or the write failed."""
        try:
            valid_message = UIMessage.model_validate({
                "id": str(uuid.uuid4()),
                "role": role,
                "parts": parts,
                "metadata": metadata,
            })
        except ValidationError as e:
            logger.error(f"Invalid message data: {e.errors()}")
            return None

        try:
            message = SessionMessage(
                id=valid_message.id,
                role=valid_message.role,
                parts=valid_message.to_dict()["parts"],
                message_metadata=valid_message.metadata,
                project_session_id=project_session,
            )
            self.db.add(message)
            self.db.commit()
            self.db.refresh(message)
            return message
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating message: {str(e)}")
            return None

    def get_message(self, message_id: str) -> Optional[SessionMessage]:
        try:
            return self.db.get(SessionMessage, message_id)
        except Exception as e:
            logger.error(f"Error fetching message with ID {message_id}: {str(e)}")
            return None

    def update_message(self, message_id: str, data: Dict[str, Any]) -> Optional[SessionMessage]:
        """Update role, parts and/or metadata; other keys are ignored."""
        try:
            message = self.db.get(SessionMessage, message_id)
            if not message:
                logger.error(f"Message with ID {message_id} not found")
                return None

            if data.get("role") is not None:
                message.role = data["role"]
            if data.get("parts") is not None:
                message.parts = data["parts"]
            if data.get("metadata") is not None:
                message.message_metadata = data["metadata"]
            message.updated_at = utc_now()

            self.db.add(message)
            self.db.commit()
            self.db.refresh(message)
            return message
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating message with ID {message_id}: {str(e)}")
            return None

    def delete_message(self, message_id: str) -> bool:
        try:
            message = self.db.get(SessionMessage, message_id)
            if not message:
                logger.error(f"Message with ID {message_id} not found")
                return False
            self.db.delete(message)
            self.db.commit()
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting message with ID {message_id}: {str(e)}")
            return False

    def find_messages(
        self,
        session_id: Optional[str] = None,
        sort: Optional[str] = "createdAt",
        limit: int = DEFAULT_LIMIT,
        page: int = 1
    ) -> Optional[Dict[str, Any]]:
        try:
            statement = select(SessionMessage)
            if session_id:
                statement = statement.where(SessionMessage.project_session_id == session_id)
            return paginate(self.db, statement, SessionMessage, sort=sort, limit=limit, page=page)
        except Exception as e:
            logger.error(f"Error finding messages: {str(e)}")
            return None
