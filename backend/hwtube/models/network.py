"""Network and NetworkMembership ORM models."""
import enum
import uuid
from sqlalchemy import Column, String, DateTime, JSON, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship
from hwtube.database import Base, utc_now


class MembershipRole(str, enum.Enum):
    owner = "owner"
    member = "member"


class MembershipStatus(str, enum.Enum):
    active = "active"


class Network(Base):
    __tablename__ = "networks"

    network_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    themes = Column(JSON, nullable=False, default=list)
    logo_url = Column(String(2048), nullable=True)
    owner_id = Column(String(36), ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    owner = relationship("User")
    memberships = relationship(
        "NetworkMembership",
        back_populates="network",
        cascade="all, delete-orphan",
        order_by="NetworkMembership.joined_at",
    )
    invitations = relationship("NetworkInvitation", back_populates="network", cascade="all, delete-orphan")
    applications = relationship("NetworkApplication", back_populates="network", cascade="all, delete-orphan")


class NetworkMembership(Base):
    __tablename__ = "network_memberships"

    # Composite key: one membership per (network, user)
    network_id = Column(
        String(36), ForeignKey("networks.network_id", ondelete="CASCADE"), primary_key=True
    )
    user_id = Column(String(36), ForeignKey("users.user_id", ondelete="RESTRICT"), primary_key=True)
    role = Column(SAEnum(MembershipRole), nullable=False, default=MembershipRole.member)
    status = Column(SAEnum(MembershipStatus), nullable=False, default=MembershipStatus.active)
    joined_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    network = relationship("Network", back_populates="memberships")
    user = relationship("User", back_populates="memberships")
