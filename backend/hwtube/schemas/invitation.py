"""Pydantic schemas for Invitations."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class InvitationCreate(BaseModel):
    user_id: str
    message: Optional[str] = Field(default=None, max_length=500)


class InvitationResponse(BaseModel):
    action: str  # accept, reject


class InvitationOut(BaseModel):
    invitation_id: str
    network_id: str
    invited_user_id: str
    inviter_id: str
    message: Optional[str] = None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
