"""Invitation service: owner-initiated offers and the invitee's response."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hwtube.config import settings
from hwtube.database import utc_now
from hwtube.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from hwtube.models.invitation import InvitationStatus, NetworkInvitation
from hwtube.models.network import MembershipRole
from hwtube.models.user import User
from hwtube.services.network_service import add_membership, get_membership, get_network_or_404, require_owner

logger = logging.getLogger(__name__)

INVITATION_ACTIONS = ("accept", "reject")


def invite_user(
    db: Session,
    caller_id: str,
    network_id: str,
    target_user_id: str,
    message: Optional[str] = None,
) -> NetworkInvitation:
    """Create a pending invitation from the network owner to ``target_user_id``."""
    network = get_network_or_404(db, network_id)
    require_owner(network, caller_id, "invite users")

    if db.get(User, target_user_id) is None:
        raise NotFoundError("User not found", user_id=target_user_id)
    if get_membership(db, network_id, target_user_id) is not None:
        raise ConflictError("User is already a member of this network", network_id=network_id, user_id=target_user_id)

    existing = (
        db.query(NetworkInvitation)
        .filter(NetworkInvitation.network_id == network_id, NetworkInvitation.invited_user_id == target_user_id)
        .first()
    )
    if existing is not None:
        if existing.status == InvitationStatus.pending or not settings.ALLOW_REINVITE_AFTER_TERMINAL:
            logger.warning("Duplicate invitation for user %s to network %s", target_user_id, network_id)
            raise ConflictError(
                "User has already been invited to this network",
                network_id=network_id,
                user_id=target_user_id,
                invitation_id=existing.invitation_id,
                status=existing.status.value,
            )
        # Supersede the terminal row; the (network, user) pair stays unique.
        existing.status = InvitationStatus.pending
        existing.inviter_id = caller_id
        existing.message = message
        existing.created_at = utc_now()
        db.commit()
        db.refresh(existing)
        logger.info("Re-issued invitation %s to user %s for network %s", existing.invitation_id, target_user_id, network_id)
        return existing

    invitation = NetworkInvitation(
        network_id=network_id,
        invited_user_id=target_user_id,
        inviter_id=caller_id,
        message=message,
        status=InvitationStatus.pending,
    )
    db.add(invitation)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Concurrent invitation for user %s to network %s", target_user_id, network_id)
        raise ConflictError("User has already been invited to this network", network_id=network_id, user_id=target_user_id)
    db.refresh(invitation)
    logger.info("Invited user %s to network %s (invitation %s)", target_user_id, network_id, invitation.invitation_id)
    return invitation


def list_invitations_for_user(db: Session, user_id: str) -> list[NetworkInvitation]:
    """Pending invitations addressed to ``user_id``, newest first."""
    return (
        db.query(NetworkInvitation)
        .filter(
            NetworkInvitation.invited_user_id == user_id,
            NetworkInvitation.status == InvitationStatus.pending,
        )
        .order_by(NetworkInvitation.created_at.desc())
        .all()
    )


def respond_to_invitation(db: Session, caller_id: str, invitation_id: str, action: str) -> NetworkInvitation:
    """Accept or reject an invitation as the invited user.

    Accepting inserts the membership before touching the invitation, and both
    writes commit together. If the caller is already a member the membership
    insert fails with ``ConflictError`` and the invitation keeps its status.
    """
    if action not in INVITATION_ACTIONS:
        raise ValidationError(f"Invalid action: {action}", field="action", allowed=list(INVITATION_ACTIONS))

    invitation = db.get(NetworkInvitation, invitation_id)
    if invitation is None:
        raise NotFoundError("Invitation not found", invitation_id=invitation_id)
    if invitation.invited_user_id != caller_id:
        logger.warning("User %s tried to answer invitation %s addressed to someone else", caller_id, invitation_id)
        raise ForbiddenError("Only the invited user may respond", invitation_id=invitation_id, user_id=caller_id)

    if action == "accept":
        add_membership(db, invitation.network_id, caller_id, MembershipRole.member)
        invitation.status = InvitationStatus.accepted
    else:
        invitation.status = InvitationStatus.rejected
    db.commit()
    db.refresh(invitation)
    logger.info("Invitation %s %s by user %s", invitation_id, invitation.status.value, caller_id)
    return invitation
