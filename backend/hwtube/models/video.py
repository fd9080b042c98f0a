"""Video metadata ORM model. The bytes live in object storage."""
import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from hwtube.database import Base, utc_now


class Video(Base):
    __tablename__ = "videos"

    video_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    uploader_id = Column(String(36), ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    filename = Column(String(512), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    uploader = relationship("User", back_populates="videos")
