"""Reconciliation pass for memberships lost between two writes.

Accepting an invitation, approving an application and creating a network
each pair a status change (or a new network) with a membership insert. Both
writes share one transaction, but a store without transactional guarantees
or a crash between them can leave:

- a network whose owner holds no membership
- an accepted invitation with no matching membership
- an approved application with no matching membership

``find_inconsistencies`` reports these; ``repair`` inserts the missing rows.
"""
import logging
from dataclasses import dataclass, field

from sqlalchemy import and_
from sqlalchemy.orm import Session

from hwtube.models.application import ApplicationStatus, NetworkApplication
from hwtube.models.invitation import InvitationStatus, NetworkInvitation
from hwtube.models.network import MembershipRole, MembershipStatus, Network, NetworkMembership

logger = logging.getLogger(__name__)


@dataclass
class MissingMembership:
    network_id: str
    user_id: str
    role: MembershipRole
    source: str  # network, invitation, application
    source_id: str


@dataclass
class ReconcileReport:
    missing: list[MissingMembership] = field(default_factory=list)
    repaired: int = 0

    @property
    def is_consistent(self) -> bool:
        return not self.missing


def find_inconsistencies(db: Session) -> ReconcileReport:
    report = ReconcileReport()

    networks = (
        db.query(Network)
        .outerjoin(
            NetworkMembership,
            and_(
                NetworkMembership.network_id == Network.network_id,
                NetworkMembership.user_id == Network.owner_id,
            ),
        )
        .filter(NetworkMembership.user_id.is_(None))
        .all()
    )
    for network in networks:
        report.missing.append(
            MissingMembership(network.network_id, network.owner_id, MembershipRole.owner, "network", network.network_id)
        )

    invitations = (
        db.query(NetworkInvitation)
        .outerjoin(
            NetworkMembership,
            and_(
                NetworkMembership.network_id == NetworkInvitation.network_id,
                NetworkMembership.user_id == NetworkInvitation.invited_user_id,
            ),
        )
        .filter(
            NetworkInvitation.status == InvitationStatus.accepted,
            NetworkMembership.user_id.is_(None),
        )
        .all()
    )
    for invitation in invitations:
        report.missing.append(
            MissingMembership(
                invitation.network_id,
                invitation.invited_user_id,
                MembershipRole.member,
                "invitation",
                invitation.invitation_id,
            )
        )

    applications = (
        db.query(NetworkApplication)
        .outerjoin(
            NetworkMembership,
            and_(
                NetworkMembership.network_id == NetworkApplication.network_id,
                NetworkMembership.user_id == NetworkApplication.applicant_id,
            ),
        )
        .filter(
            NetworkApplication.status == ApplicationStatus.approved,
            NetworkMembership.user_id.is_(None),
        )
        .all()
    )
    for application in applications:
        report.missing.append(
            MissingMembership(
                application.network_id,
                application.applicant_id,
                MembershipRole.member,
                "application",
                application.application_id,
            )
        )

    if report.missing:
        logger.warning("Found %d missing memberships", len(report.missing))
    return report


def repair(db: Session, report: ReconcileReport) -> ReconcileReport:
    """Insert the memberships listed in ``report`` in a single transaction."""
    seen = set()
    for gap in report.missing:
        key = (gap.network_id, gap.user_id)
        if key in seen:
            continue
        seen.add(key)
        db.add(
            NetworkMembership(
                network_id=gap.network_id,
                user_id=gap.user_id,
                role=gap.role,
                status=MembershipStatus.active,
            )
        )
        logger.info("Restoring %s membership of user %s in network %s (from %s %s)",
                    gap.role.value, gap.user_id, gap.network_id, gap.source, gap.source_id)
    db.commit()
    report.repaired = len(seen)
    return report
