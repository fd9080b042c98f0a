"""Profile service: self-service profile edits and privacy-aware viewing."""
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from hwtube.errors import NotFoundError
from hwtube.models.user import User
from hwtube.schemas.user import ProfileOut, ProfileUpdate

logger = logging.getLogger(__name__)

PRIVATE_CONTACT_FIELDS = ("phone", "contact_email")


def update_profile(db: Session, caller_id: str, payload: ProfileUpdate) -> User:
    user = db.get(User, caller_id)
    if user is None:
        raise NotFoundError("User not found", user_id=caller_id)

    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info("Updated profile of user %s", caller_id)
    return user


def view_profile(db: Session, caller_id: Optional[str], target_user_id: str) -> dict[str, Any]:
    """Return the target's profile as seen by ``caller_id`` (None when anonymous).

    Contact fields of a non-public profile are left out entirely for anyone
    but the profile owner.
    """
    user = db.get(User, target_user_id)
    if user is None:
        raise NotFoundError("User not found", user_id=target_user_id)

    profile = ProfileOut.model_validate(user).model_dump()
    if not user.is_public_profile and caller_id != user.user_id:
        for field in PRIVATE_CONTACT_FIELDS:
            profile.pop(field, None)
    return profile
