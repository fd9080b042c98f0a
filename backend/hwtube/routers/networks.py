"""Network API routes: CRUD, invitations, applications, members, suggestions."""
import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hwtube.database import get_db
from hwtube.dependencies import get_current_user
from hwtube.models.network import Network
from hwtube.models.user import User
from hwtube.schemas.application import ApplicationCreate, ApplicationDecision, ApplicationOut, PendingApplicationOut
from hwtube.schemas.common import OkResponse, UserBriefOut
from hwtube.schemas.invitation import InvitationCreate, InvitationOut
from hwtube.schemas.network import (
    CandidateOut,
    NetworkCreate,
    NetworkDetailOut,
    NetworkOut,
    NetworkSummaryOut,
    NetworkUpdate,
)
from hwtube.services import application_service, invitation_service, network_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/networks", tags=["Networks"])


def _summary(network: Network, member_count: int) -> NetworkSummaryOut:
    return NetworkSummaryOut(
        **NetworkOut.model_validate(network).model_dump(),
        owner=UserBriefOut.model_validate(network.owner),
        member_count=member_count,
    )


@router.post("", response_model=NetworkOut)
def create_network(
    payload: NetworkCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a network. The caller becomes its owner and first member."""
    return network_service.create_network(db, current_user.user_id, payload)


@router.get("", response_model=list[NetworkSummaryOut])
def list_networks(db: Session = Depends(get_db)):
    """List all networks, newest first, with owner and member count."""
    return [_summary(network, count) for network, count in network_service.list_networks(db)]


@router.get("/{network_id}", response_model=NetworkDetailOut)
def get_network(network_id: str, db: Session = Depends(get_db)):
    """Fetch a network with its owner and active members."""
    return network_service.get_network(db, network_id)


@router.patch("/{network_id}", response_model=NetworkOut)
def update_network(
    network_id: str,
    payload: NetworkUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partially update a network (owner only)."""
    return network_service.update_network(db, current_user.user_id, network_id, payload)


@router.delete("/{network_id}", response_model=OkResponse)
def delete_network(
    network_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a network and everything attached to it (owner only)."""
    network_service.delete_network(db, current_user.user_id, network_id)
    return OkResponse()


@router.post("/{network_id}/invite", response_model=InvitationOut)
def invite_user(
    network_id: str,
    payload: InvitationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Invite a user to join (owner only)."""
    return invitation_service.invite_user(db, current_user.user_id, network_id, payload.user_id, payload.message)


@router.post("/{network_id}/apply", response_model=ApplicationOut)
def apply_to_network(
    network_id: str,
    payload: ApplicationCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Ask to join a network."""
    return application_service.apply_to_network(db, current_user.user_id, network_id, payload.message)


@router.get("/{network_id}/applications", response_model=list[PendingApplicationOut])
def list_pending_applications(
    network_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return application_service.list_pending_applications(db, current_user.user_id, network_id)


@router.patch("/{network_id}/applications/{application_id}", response_model=OkResponse)
def respond_to_application(
    network_id: str,
    application_id: str,
    payload: ApplicationDecision,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Approve or reject a pending application (owner only)."""
    application_service.respond_to_application(
        db, current_user.user_id, network_id, application_id, payload.action
    )
    return OkResponse()


@router.delete("/{network_id}/members/{user_id}", response_model=OkResponse)
def remove_member(
    network_id: str,
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    network_service.remove_member(db, current_user.user_id, network_id, user_id)
    return OkResponse()


@router.get("/{network_id}/suggestions", response_model=list[CandidateOut])
def suggest_candidates(
    network_id: str,
    limit: int = Query(default=10),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Creators outside the network who have uploaded videos (owner only)."""
    return network_service.suggest_candidates(db, current_user.user_id, network_id, limit)
