"""Media router: metadata documents only."""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlmodel import Session

from seaward.db.config import get_session
from seaward.middleware.auth import get_current_user
from seaward.models.user import User
from seaward.schemas.common import Paginated
from seaward.schemas.message import MediaCreate, MediaRead, MediaUpdate
from seaward.services.media_service import MediaService

router = APIRouter(prefix="/media", tags=["Media"])


def get_media_service(session: Session = Depends(get_session)) -> MediaService:
    """Dependency for getting MediaService instance."""
    return MediaService(session)


@router.post("", response_model=MediaRead, status_code=status.HTTP_201_CREATED)
async def create_media(
    media_data: MediaCreate,
    current_user: User = Depends(get_current_user),
    service: MediaService = Depends(get_media_service),
):
    media = service.create_media_metadata(media_data.model_dump(exclude_unset=True))
    if not media:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create media"
        )
    return media


@router.get("", response_model=Paginated[MediaRead])
async def list_media(
    current_user: User = Depends(get_current_user),
    service: MediaService = Depends(get_media_service),
    sort: str = Query("-createdAt"),
    limit: int = Query(10, ge=0),
    page: int = Query(1, ge=1),
):
    result = service.find_media(sort=sort, limit=limit, page=page)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not list documents, check the sort field"
        )
    return result


@router.get("/{media_id}", response_model=MediaRead)
async def get_media(
    media_id: str,
    current_user: User = Depends(get_current_user),
    service: MediaService = Depends(get_media_service),
):
    media = service.get_media(media_id)
    if not media:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")
    return media


@router.patch("/{media_id}", response_model=MediaRead)
async def update_media(
    media_id: str,
    media_data: MediaUpdate,
    current_user: User = Depends(get_current_user),
    service: MediaService = Depends(get_media_service),
):
    if not service.get_media(media_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")
    media = service.update_media_metadata(media_id, media_data.model_dump(exclude_unset=True))
    if not media:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update media"
        )
    return media


@router.delete("/{media_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_media(
    media_id: str,
    current_user: User = Depends(get_current_user),
    service: MediaService = Depends(get_media_service),
):
    if not service.get_media(media_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")
    if not service.delete_media(media_id):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete media"
        )
    return None
