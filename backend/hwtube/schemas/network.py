"""Pydantic schemas for Networks and Memberships."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from hwtube.schemas.common import UserBriefOut, check_url


def _check_themes(themes: Optional[list[str]]) -> Optional[list[str]]:
    if themes is None:
        return themes
    if any(not theme.strip() for theme in themes):
        raise ValueError("Themes must be non-empty strings")
    return themes


class NetworkCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    themes: list[str] = Field(min_length=1, max_length=10)
    logo_url: Optional[str] = Field(default=None, max_length=2048)

    @field_validator("themes")
    @classmethod
    def validate_themes(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return _check_themes(v)

    @field_validator("logo_url")
    @classmethod
    def validate_logo_url(cls, v: Optional[str]) -> Optional[str]:
        return check_url(v)


class NetworkUpdate(BaseModel):
    """Partial update. Only the fields present in the request are applied."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    themes: Optional[list[str]] = Field(default=None, min_length=1, max_length=10)
    logo_url: Optional[str] = Field(default=None, max_length=2048)

    @field_validator("themes")
    @classmethod
    def validate_themes(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return _check_themes(v)

    @field_validator("logo_url")
    @classmethod
    def validate_logo_url(cls, v: Optional[str]) -> Optional[str]:
        return check_url(v)

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "NetworkUpdate":
        for field in ("name", "themes"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class NetworkOut(BaseModel):
    network_id: str
    name: str
    description: Optional[str] = None
    themes: list[str]
    logo_url: Optional[str] = None
    owner_id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class NetworkSummaryOut(NetworkOut):
    owner: UserBriefOut
    member_count: int


class MembershipOut(BaseModel):
    user_id: str
    role: str
    status: str
    joined_at: datetime
    user: UserBriefOut

    model_config = {"from_attributes": True}


class NetworkDetailOut(NetworkOut):
    owner: UserBriefOut
    memberships: list[MembershipOut] = []


class CandidateOut(BaseModel):
    user_id: str
    display_name: str
    bio: Optional[str] = None
    video_count: int
