"""Pydantic schemas for Users and Profiles."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from hwtube.schemas.common import check_url


class UserCreate(BaseModel):
    display_name: str = Field(min_length=1, max_length=100)
    email: EmailStr


class UserOut(BaseModel):
    user_id: str
    display_name: str
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}


class SocialLinks(BaseModel):
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None
    website: Optional[str] = None

    @field_validator("website")
    @classmethod
    def validate_website(cls, v: Optional[str]) -> Optional[str]:
        return check_url(v)


class ProfileUpdate(BaseModel):
    phone: Optional[str] = Field(default=None, max_length=50)
    contact_email: Optional[EmailStr] = None
    bio: Optional[str] = Field(default=None, max_length=1000)
    social_links: Optional[SocialLinks] = None
    is_public_profile: Optional[bool] = None

    @model_validator(mode="after")
    def reject_null_visibility(self) -> "ProfileUpdate":
        if "is_public_profile" in self.model_fields_set and self.is_public_profile is None:
            raise ValueError("is_public_profile cannot be null")
        return self


class ProfileOut(BaseModel):
    user_id: str
    display_name: str
    bio: Optional[str] = None
    phone: Optional[str] = None
    contact_email: Optional[str] = None
    social_links: Optional[dict[str, Optional[str]]] = None
    is_public_profile: bool
    created_at: datetime

    model_config = {"from_attributes": True}
