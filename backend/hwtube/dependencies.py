"""FastAPI dependencies for the caller's identity.

Authentication itself happens upstream; by the time a request reaches this
service the gateway has put the authenticated user's id in ``X-User-Id``.
Handlers pass that id explicitly into the service layer.
"""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from hwtube.database import get_db
from hwtube.models.user import User

logger = logging.getLogger(__name__)


def _resolve_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        logger.warning("Request carried unknown user id %s", user_id)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return user


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """Require an authenticated caller."""
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return _resolve_user(db, x_user_id)


def get_optional_user(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Current user if one is identified, None for anonymous requests."""
    if not x_user_id:
        return None
    return _resolve_user(db, x_user_id)
