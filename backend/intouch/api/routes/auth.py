"""
Authentication routes for register, login, logout and the current user.
"""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from intouch.core.config import settings
from intouch.db.session import get_db
from intouch.schemas.user import UserCreate, UserLogin, UserResponse, UserWithPods
from intouch.models.user import User
from intouch.services.auth_service import (
    register_user, authenticate_user, create_session, destroy_session
)
from intouch.services.pod_service import get_user_with_pods
from intouch.api.dependencies import get_current_user, get_session_token
from intouch.api.routes.pods import to_pod_summary

router = APIRouter(prefix="/auth", tags=["auth"])


def set_session_cookie(response: Response, token: str):
    """Attach the signed session token to the response."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_HOURS * 60 * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax"
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, response: Response, db: Session = Depends(get_db)):
    """Register a new user and start a session."""
    user = register_user(
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
        display_name=user_data.display_name,
        db=db
    )

    _, token = create_session(user.id, db)
    set_session_cookie(response, token)

    return user


@router.post("/login", response_model=UserResponse)
async def login(credentials: UserLogin, response: Response, db: Session = Depends(get_db)):
    """Login and start a session."""
    user = authenticate_user(credentials.username, credentials.password, db)

    if not user or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    _, token = create_session(user.id, db)
    set_session_cookie(response, token)

    return user


@router.post("/logout")
async def logout(
    response: Response,
    token: str = Depends(get_session_token),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Logout by deleting the server-side session."""
    if not destroy_session(token, db):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not log out"
        )
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserWithPods)
async def get_me(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the current user with their pods."""
    user, pods = get_user_with_pods(current_user.id, db)

    return UserWithPods(
        **UserResponse.model_validate(user).model_dump(),
        pods=[to_pod_summary(*entry) for entry in pods]
    )
