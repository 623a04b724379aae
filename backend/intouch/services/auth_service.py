"""
Auth service for registration, credential checks and server-side sessions.
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import datetime
from functools import lru_cache
from typing import Optional, Tuple
import logging
from intouch.core.exceptions import ConflictException
from intouch.core.security import (
    verify_password, get_password_hash, generate_session_id,
    session_expiry, sign_session_id, unsign_session_id
)
from intouch.models.session import UserSession
from intouch.models.user import User

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_password_hash() -> str:
    """Hash checked against when the username is unknown, so both paths cost a bcrypt check."""
    return get_password_hash(generate_session_id())


def register_user(
    username: str,
    email: str,
    password: str,
    display_name: str,
    db: Session
) -> User:
    """Create a user, rejecting a taken username or email."""
    if db.query(User).filter(User.username == username).first():
        raise ConflictException("Username already exists")

    if db.query(User).filter(User.email == email).first():
        raise ConflictException("Email already exists")

    user = User(
        username=username,
        email=email,
        hashed_password=get_password_hash(password),
        display_name=display_name
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictException("Username or email already exists")
    db.refresh(user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return user


def authenticate_user(username: str, password: str, db: Session) -> Optional[User]:
    """Return the user for valid credentials, otherwise None."""
    user = db.query(User).filter(User.username == username).first()
    if not user:
        verify_password(password, _dummy_password_hash())
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_session(user_id: int, db: Session) -> Tuple[UserSession, str]:
    """Open a session for a user. Returns the row and the signed cookie value."""
    purge_expired_sessions(db)

    user_session = UserSession(
        sid=generate_session_id(),
        user_id=user_id,
        expires_at=session_expiry()
    )
    db.add(user_session)
    db.commit()
    db.refresh(user_session)

    return user_session, sign_session_id(user_session.sid, user_session.expires_at)


def purge_expired_sessions(db: Session) -> int:
    """Delete sessions whose expiry has passed. Returns how many were removed."""
    purged = db.query(UserSession).filter(
        UserSession.expires_at < datetime.utcnow()
    ).delete(synchronize_session=False)
    if purged:
        logger.info(f"Purged {purged} expired sessions")
    return purged


def get_session(token: Optional[str], db: Session) -> Optional[UserSession]:
    """Resolve a cookie value to a live session, dropping expired ones."""
    if not token:
        return None

    sid = unsign_session_id(token)
    if not sid:
        return None

    user_session = db.query(UserSession).filter(UserSession.sid == sid).first()
    if not user_session:
        return None

    if user_session.expires_at < datetime.utcnow():
        db.delete(user_session)
        db.commit()
        return None

    return user_session


def destroy_session(token: Optional[str], db: Session) -> bool:
    """Delete the session behind a cookie value."""
    user_session = get_session(token, db)
    if not user_session:
        return False

    db.delete(user_session)
    db.commit()
    return True
