"""NetworkApplication ORM model."""
import enum
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
from hwtube.database import Base, utc_now


class ApplicationStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class NetworkApplication(Base):
    __tablename__ = "network_applications"
    __table_args__ = (
        UniqueConstraint("network_id", "applicant_id", name="uq_application_network_user"),
    )

    application_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    network_id = Column(
        String(36), ForeignKey("networks.network_id", ondelete="CASCADE"), nullable=False, index=True
    )
    applicant_id = Column(String(36), ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False)
    message = Column(String(500), nullable=True)
    status = Column(SAEnum(ApplicationStatus), nullable=False, default=ApplicationStatus.pending)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    network = relationship("Network", back_populates="applications")
    applicant = relationship("User")
