"""User service: registration, credential checks and profile updates."""
from typing import Any, Dict, Optional
import logging

from sqlmodel import Session, select
from werkzeug.security import check_password_hash, generate_password_hash

from seaward.models.user import User
from seaward.models.types import utc_now

logger = logging.getLogger(__name__)


class UserService:
    """Service for user accounts"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.exec(select(User).where(User.email == email)).first()

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Fetch a user, None if missing or on error."""
        try:
            return self.db.get(User, user_id)
        except Exception as e:
            logger.error(f"Error fetching user with ID {user_id}: {str(e)}")
            return None

    def register(self, email: str, password: str, username: Optional[str] = None) -> User:
        """Create a user with a hashed password."""
        user = User(
            email=email,
            username=username,
            password_hash=generate_password_hash(password),
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user when the password matches, otherwise None."""
        user = self.get_by_email(email)
        if not user or not user.password_hash:
            return None
        if not check_password_hash(user.password_hash, password):
            return None
        return user

    def update_user(self, user_id: str, data: Dict[str, Any]) -> Optional[User]:
        """
        Update a user by ID.

        Args:
            user_id: User to update
            data: Fields to change

        Returns:
            The updated user, or None if missing or the write failed
        """
        try:
            user = self.db.get(User, user_id)
            if not user:
                logger.error(f"User with ID {user_id} not found")
                return None
            for key, value in data.items():
                setattr(user, key, value)
            user.updated_at = utc_now()
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating user {user_id}: {str(e)}")
            return None

    def update_user_settings(self, acting_user: User, user_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update settings on behalf of the acting user.

        Returns:
            {"success": True, "message": ...} or {"success": False, "error": ...}
        """
        if acting_user.id != user_id and not acting_user.is_admin:
            return {"success": False, "error": "Not authorized to update this user"}
        if "role" in data and not acting_user.is_admin:
            return {"success": False, "error": "Only admins can change roles"}

        updated = self.update_user(user_id, data)
        if not updated:
            return {"success": False, "error": "Failed to update user"}
        return {"success": True, "message": "User settings updated successfully"}
