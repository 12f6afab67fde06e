"""Media service: metadata documents for uploaded files."""
from typing import Any, Dict, Optional
import logging

from sqlmodel import Session, select

from seaward.models.media import Media
from seaward.models.types import utc_now
from seaward.services.pagination import paginate, DEFAULT_LIMIT

logger = logging.getLogger(__name__)


class MediaService:
    """Service for media metadata; the binary upload is handled elsewhere."""

    def __init__(self, db: Session):
        self.db = db

    def create_media_metadata(self, data: Dict[str, Any]) -> Optional[Media]:
        try:
            if not data.get("alt"):
                raise ValueError("Alt text is required for media")
            media = Media(**data)
            self.db.add(media)
            self.db.commit()
            self.db.refresh(media)
            return media
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error creating media metadata: {str(e)}")
            return None

    def get_media(self, media_id: str) -> Optional[Media]:
        try:
            return self.db.get(Media, media_id)
        except Exception as e:
            logger.error(f"Error fetching media with ID {media_id}: {str(e)}")
            return None

    def update_media_metadata(self, media_id: str, data: Dict[str, Any]) -> Optional[Media]:
        try:
            media = self.db.get(Media, media_id)
            if not media:
                logger.error(f"Media with ID {media_id} not found")
                return None
            for key, value in data.items():
                setattr(media, key, value)
            media.updated_at = utc_now()
            self.db.add(media)
            self.db.commit()
            self.db.refresh(media)
            return media
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error updating media metadata with ID {media_id}: {str(e)}")
            return None

    def delete_media(self, media_id: str) -> bool:
        try:
            media = self.db.get(Media, media_id)
            if not media:
                logger.error(f"Media with ID {media_id} not found")
                return False
            self.db.delete(media)
            self.db.commit()
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error deleting media with ID {media_id}: {str(e)}")
            return False

    def find_media(
        self,
        sort: Optional[str] = "-createdAt",
        limit: int = DEFAULT_LIMIT,
        page: int = 1
    ) -> Optional[Dict[str, Any]]:
        try:
            return paginate(self.db, select(Media), Media, sort=sort, limit=limit, page=page)
        except Exception as e:
            logger.error(f"Error finding media: {str(e)}")
            return None
