"""Video metadata routes. Upload URLs and streaming live elsewhere."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hwtube.database import get_db
from hwtube.dependencies import get_current_user
from hwtube.models.user import User
from hwtube.models.video import Video
from hwtube.schemas.video import VideoCreate, VideoOut

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/videos", tags=["Videos"])


@router.post("", response_model=VideoOut, status_code=status.HTTP_201_CREATED)
def create_video(
    payload: VideoCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Record an uploaded video. The caller becomes its uploader."""
    video = Video(**payload.model_dump(), uploader_id=current_user.user_id)
    db.add(video)
    db.commit()
    db.refresh(video)
    logger.info("Registered video %s by user %s", video.video_id, current_user.user_id)
    return video


@router.get("/{video_id}", response_model=VideoOut)
def get_video(video_id: str, db: Session = Depends(get_db)):
    video = db.get(Video, video_id)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")
    return video
