"""Network service: the network lifecycle and owner-only membership actions.

Every function takes the acting user's id as ``caller_id``; nothing here
reads request state. Uniqueness of memberships is backed by the composite
primary key on ``network_memberships``, so concurrent writers can at worst
see a ``ConflictError``.
"""
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hwtube.config import settings
from hwtube.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from hwtube.models.application import NetworkApplication
from hwtube.models.invitation import NetworkInvitation
from hwtube.models.network import MembershipRole, MembershipStatus, Network, NetworkMembership
from hwtube.models.user import User
from hwtube.models.video import Video
from hwtube.schemas.network import NetworkCreate, NetworkUpdate

logger = logging.getLogger(__name__)


def get_network_or_404(db: Session, network_id: str) -> Network:
    network = db.get(Network, network_id)
    if network is None:
        raise NotFoundError("Network not found", network_id=network_id)
    return network


def require_owner(network: Network, caller_id: str, action: str) -> None:
    """Only the owner may mutate a network or decide who belongs to it."""
    if network.owner_id != caller_id:
        logger.warning("User %s tried to %s on network %s without owning it", caller_id, action, network.network_id)
        raise ForbiddenError(
            f"Only the network owner may {action}",
            network_id=network.network_id,
            user_id=caller_id,
        )


def get_membership(db: Session, network_id: str, user_id: str) -> Optional[NetworkMembership]:
    return (
        db.query(NetworkMembership)
        .filter(NetworkMembership.network_id == network_id, NetworkMembership.user_id == user_id)
        .first()
    )


def add_membership(db: Session, network_id: str, user_id: str, role: MembershipRole) -> NetworkMembership:
    """Insert an active membership and flush it, without committing.

    Callers commit once their remaining writes are staged, so the membership
    and whatever status change it accompanies land together. A duplicate
    rolls the whole session back.
    """
    if get_membership(db, network_id, user_id) is not None:
        db.rollback()
        logger.warning("User %s is already a member of network %s", user_id, network_id)
        raise ConflictError("User is already a member of this network", network_id=network_id, user_id=user_id)

    membership = NetworkMembership(
        network_id=network_id,
        user_id=user_id,
        role=role,
        status=MembershipStatus.active,
    )
    db.add(membership)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        logger.warning("Concurrent membership insert for user %s in network %s", user_id, network_id)
        raise ConflictError("User is already a member of this network", network_id=network_id, user_id=user_id)
    return membership


def create_network(db: Session, caller_id: str, payload: NetworkCreate) -> Network:
    """Create a network owned by the caller, together with the owner's membership."""
    if db.get(User, caller_id) is None:
        raise NotFoundError("User not found", user_id=caller_id)

    network = Network(
        name=payload.name,
        description=payload.description,
        themes=list(payload.themes),
        logo_url=payload.logo_url,
        owner_id=caller_id,
    )
    db.add(network)
    db.flush()

    add_membership(db, network.network_id, caller_id, MembershipRole.owner)
    db.commit()
    db.refresh(network)
    logger.info("Created network '%s' (%s) owned by user %s", network.name, network.network_id, caller_id)
    return network


def list_networks(db: Session) -> list[tuple[Network, int]]:
    """All networks, newest first, each paired with its member count."""
    counts = (
        db.query(NetworkMembership.network_id, func.count().label("member_count"))
        .group_by(NetworkMembership.network_id)
        .subquery()
    )
    rows = (
        db.query(Network, func.coalesce(counts.c.member_count, 0))
        .outerjoin(counts, counts.c.network_id == Network.network_id)
        .order_by(Network.created_at.desc())
        .all()
    )
    return [(network, int(count)) for network, count in rows]


def get_network(db: Session, network_id: str) -> Network:
    return get_network_or_404(db, network_id)


def update_network(db: Session, caller_id: str, network_id: str, payload: NetworkUpdate) -> Network:
    """Apply the fields present in ``payload``; everything else is left alone."""
    network = get_network_or_404(db, network_id)
    require_owner(network, caller_id, "update it")

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(network, field, value)
    db.commit()
    db.refresh(network)
    logger.info("Updated network %s", network_id)
    return network


def delete_network(db: Session, caller_id: str, network_id: str) -> None:
    """Delete the network; memberships, invitations and applications go with it."""
    network = get_network_or_404(db, network_id)
    require_owner(network, caller_id, "delete it")

    db.delete(network)
    db.commit()
    logger.info("Deleted network %s", network_id)


def remove_member(db: Session, caller_id: str, network_id: str, target_user_id: str) -> None:
    """Remove a non-owner member.

    The pair's accepted invitation or approved application is deleted with
    the membership, otherwise the reconciliation pass would read it as a
    membership lost mid-write and restore it.
    """
    network = get_network_or_404(db, network_id)
    require_owner(network, caller_id, "remove members")
    if target_user_id == caller_id:
        raise ValidationError(
            "The owner cannot remove themselves; delete the network instead",
            field="user_id",
            network_id=network_id,
        )

    membership = get_membership(db, network_id, target_user_id)
    if membership is None:
        raise NotFoundError("Membership not found", network_id=network_id, user_id=target_user_id)

    db.delete(membership)
    db.query(NetworkInvitation).filter(
        NetworkInvitation.network_id == network_id,
        NetworkInvitation.invited_user_id == target_user_id,
    ).delete(synchronize_session=False)
    db.query(NetworkApplication).filter(
        NetworkApplication.network_id == network_id,
        NetworkApplication.applicant_id == target_user_id,
    ).delete(synchronize_session=False)
    db.commit()
    logger.info("Removed user %s from network %s", target_user_id, network_id)


def member_network_ids(db: Session, user_id: str) -> list[str]:
    """Ids of the networks the user is an active member of (feed ranking input)."""
    rows = (
        db.query(NetworkMembership.network_id)
        .filter(
            NetworkMembership.user_id == user_id,
            NetworkMembership.status == MembershipStatus.active,
        )
        .all()
    )
    return [network_id for (network_id,) in rows]


def list_user_networks(db: Session, user_id: str) -> list[Network]:
    network_ids = member_network_ids(db, user_id)
    if not network_ids:
        return []
    return (
        db.query(Network)
        .filter(Network.network_id.in_(network_ids))
        .order_by(Network.created_at.desc())
        .all()
    )


def suggest_candidates(db: Session, caller_id: str, network_id: str, limit: int = 10) -> list[dict]:
    """Users outside the network who have uploaded at least one video.

    Placeholder recommendation: presence filter only, no theme matching.
    """
    if limit < 1 or limit > settings.SUGGESTION_LIMIT_MAX:
        raise ValidationError(
            f"limit must be between 1 and {settings.SUGGESTION_LIMIT_MAX}", field="limit", value=limit
        )

    network = get_network_or_404(db, network_id)
    require_owner(network, caller_id, "view suggestions")

    member_ids = [m.user_id for m in network.memberships]
    video_count = func.count(Video.video_id).label("video_count")
    rows = (
        db.query(User, video_count)
        .join(Video, Video.uploader_id == User.user_id)
        .filter(User.user_id.notin_(member_ids))
        .group_by(User.user_id)
        .order_by(User.created_at)
        .limit(limit)
        .all()
    )
    return [
        {
            "user_id": user.user_id,
            "display_name": user.display_name,
            "bio": user.bio,
            "video_count": int(count),
        }
        for user, count in rows
    ]
