"""Application service: user-initiated join requests and the owner's decision."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from hwtube.config import settings
from hwtube.database import utc_now
from hwtube.errors import ConflictError, NotFoundError, ValidationError
from hwtube.models.application import ApplicationStatus, NetworkApplication
from hwtube.models.network import MembershipRole
from hwtube.services.network_service import add_membership, get_membership, get_network_or_404, require_owner

logger = logging.getLogger(__name__)

APPLICATION_ACTIONS = ("approve", "reject")


def apply_to_network(db: Session, caller_id: str, network_id: str, message: Optional[str] = None) -> NetworkApplication:
    get_network_or_404(db, network_id)
    if get_membership(db, network_id, caller_id) is not None:
        raise ConflictError("Already a member of this network", network_id=network_id, user_id=caller_id)

    existing = (
        db.query(NetworkApplication)
        .filter(NetworkApplication.network_id == network_id, NetworkApplication.applicant_id == caller_id)
        .first()
    )
    if existing is not None:
        if existing.status == ApplicationStatus.pending or not settings.ALLOW_REAPPLY_AFTER_TERMINAL:
            logger.warning("Duplicate application by user %s to network %s", caller_id, network_id)
            raise ConflictError(
                "Already applied to this network",
                network_id=network_id,
                user_id=caller_id,
                application_id=existing.application_id,
                status=existing.status.value,
            )
        existing.status = ApplicationStatus.pending
        existing.message = message
        existing.created_at = utc_now()
        db.commit()
        db.refresh(existing)
        logger.info("User %s re-applied to network %s (application %s)", caller_id, network_id, existing.application_id)
        return existing

    application = NetworkApplication(
        network_id=network_id,
        applicant_id=caller_id,
        message=message,
        status=ApplicationStatus.pending,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Concurrent application by user %s to network %s", caller_id, network_id)
        raise ConflictError("Already applied to this network", network_id=network_id, user_id=caller_id)
    db.refresh(application)
    logger.info("User %s applied to network %s (application %s)", caller_id, network_id, application.application_id)
    return application


def list_pending_applications(db: Session, caller_id: str, network_id: str) -> list[NetworkApplication]:
    """Pending applications for the owner to review, most recent first."""
    network = get_network_or_404(db, network_id)
    require_owner(network, caller_id, "list applications")
    return (
        db.query(NetworkApplication)
        .options(joinedload(NetworkApplication.applicant))
        .filter(
            NetworkApplication.network_id == network_id,
            NetworkApplication.status == ApplicationStatus.pending,
        )
        .order_by(NetworkApplication.created_at.desc())
        .all()
    )


def respond_to_application(
    db: Session,
    caller_id: str,
    network_id: str,
    application_id: str,
    action: str,
) -> NetworkApplication:
    """Approve or reject an application as the network owner.

    Approval follows the same ordering as accepting an invitation: membership
    insert first, status change second, one commit.
    """
    if action not in APPLICATION_ACTIONS:
        raise ValidationError(f"Invalid action: {action}", field="action", allowed=list(APPLICATION_ACTIONS))

    network = get_network_or_404(db, network_id)
    require_owner(network, caller_id, "decide applications")

    application = db.get(NetworkApplication, application_id)
    if application is None or application.network_id != network_id:
        raise NotFoundError("Application not found", network_id=network_id, application_id=application_id)

    if action == "approve":
        add_membership(db, network_id, application.applicant_id, MembershipRole.member)
        application.status = ApplicationStatus.approved
    else:
        application.status = ApplicationStatus.rejected
    db.commit()
    db.refresh(application)
    logger.info("Application %s to network %s %s", application_id, network_id, application.status.value)
    return application
