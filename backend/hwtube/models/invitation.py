"""NetworkInvitation ORM model."""
import enum
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
from hwtube.database import Base, utc_now


class InvitationStatus(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class NetworkInvitation(Base):
    __tablename__ = "network_invitations"
    __table_args__ = (
        # One row per (network, invitee) whatever its status
        UniqueConstraint("network_id", "invited_user_id", name="uq_invitation_network_user"),
    )

    invitation_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    network_id = Column(
        String(36), ForeignKey("networks.network_id", ondelete="CASCADE"), nullable=False, index=True
    )
    invited_user_id = Column(String(36), ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False)
    inviter_id = Column(String(36), ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False)
    message = Column(String(500), nullable=True)
    status = Column(SAEnum(InvitationStatus), nullable=False, default=InvitationStatus.pending)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    network = relationship("Network", back_populates="invitations")
    invited_user = relationship("User", foreign_keys=[invited_user_id])
    inviter = relationship("User", foreign_keys=[inviter_id])
