"""User and profile API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hwtube.database import get_db
from hwtube.dependencies import get_current_user, get_optional_user
from hwtube.models.user import User
from hwtube.schemas.network import NetworkOut
from hwtube.schemas.user import ProfileOut, ProfileUpdate, UserCreate, UserOut
from hwtube.services import network_service, profile_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Register a user record. Credentials are handled by the identity provider."""
    user = User(**payload.model_dump())
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Rejected duplicate email %s", payload.email)
        raise HTTPException(status_code=409, detail="A user with this email already exists")
    db.refresh(user)
    logger.info("Created user %s (%s)", user.user_id, user.display_name)
    return user


@router.get("", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    return db.query(User).order_by(User.created_at).all()


@router.get("/profile", response_model=ProfileOut)
def get_own_profile(current_user: User = Depends(get_current_user)):
    """The caller's own profile, contact fields included."""
    return current_user


@router.patch("/profile", response_model=ProfileOut)
def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partially update the caller's profile."""
    return profile_service.update_profile(db, current_user.user_id, payload)


@router.get("/me/networks", response_model=list[NetworkOut])
def list_my_networks(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Networks the caller is an active member of."""
    return network_service.list_user_networks(db, current_user.user_id)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/{user_id}/profile", response_model=ProfileOut, response_model_exclude_unset=True)
def view_profile(
    user_id: str,
    current_user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    """Public view of a profile; private contact fields are omitted for other viewers."""
    caller_id = current_user.user_id if current_user else None
    return profile_service.view_profile(db, caller_id, user_id)
