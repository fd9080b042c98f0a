"""Pydantic schemas for Applications."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ApplicationCreate(BaseModel):
    message: Optional[str] = Field(default=None, max_length=500)


class ApplicationDecision(BaseModel):
    action: str  # approve, reject


class ApplicantOut(BaseModel):
    user_id: str
    display_name: str
    bio: Optional[str] = None

    model_config = {"from_attributes": True}


class ApplicationOut(BaseModel):
    application_id: str
    network_id: str
    applicant_id: str
    message: Optional[str] = None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class PendingApplicationOut(ApplicationOut):
    applicant: ApplicantOut
