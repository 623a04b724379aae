"""
Shared route dependencies: resolving the caller from the session cookie.
"""
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from intouch.core.config import settings
from intouch.db.session import get_db
from intouch.models.user import User
from intouch.services.auth_service import get_session


def get_session_token(request: Request) -> str:
    """Read the signed session token from the request cookie."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_current_user(
    token: str = Depends(get_session_token),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the authenticated user or reject with a uniform 401."""
    user_session = get_session(token, db)
    if not user_session or not user_session.user or not user_session.user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )
    return user_session.user
