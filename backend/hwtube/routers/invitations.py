"""Invitation API routes for the invited user."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hwtube.database import get_db
from hwtube.dependencies import get_current_user
from hwtube.models.user import User
from hwtube.schemas.common import OkResponse
from hwtube.schemas.invitation import InvitationOut, InvitationResponse
from hwtube.services import invitation_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/invitations", tags=["Invitations"])


@router.get("", response_model=list[InvitationOut])
def list_my_invitations(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Pending invitations addressed to the caller."""
    return invitation_service.list_invitations_for_user(db, current_user.user_id)


@router.patch("/{invitation_id}", response_model=OkResponse)
def respond_to_invitation(
    invitation_id: str,
    payload: InvitationResponse,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Accept or reject an invitation."""
    invitation_service.respond_to_invitation(db, current_user.user_id, invitation_id, payload.action)
    return OkResponse()
