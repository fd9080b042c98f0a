"""User ORM model, including the public profile fields."""
import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from hwtube.database import Base, utc_now


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    display_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    bio = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    contact_email = Column(String(255), nullable=True)
    social_links = Column(JSON, nullable=True)  # {"twitter": ..., "website": ...}
    is_public_profile = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    memberships = relationship("NetworkMembership", back_populates="user")
    videos = relationship("Video", back_populates="uploader")
