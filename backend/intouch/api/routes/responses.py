"""
Response routes for answering prompts and liking answers.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from intouch.db.session import get_db
from intouch.models.user import User
from intouch.schemas.response import (
    ResponseCreate, ResponseOut, ResponseWithDetails, LikeResponse, UnlikeResult
)
from intouch.services import response_service
from intouch.api.dependencies import get_current_user

router = APIRouter(tags=["responses"])


@router.post("/responses", response_model=ResponseOut, status_code=status.HTTP_201_CREATED)
async def create_response(
    response_data: ResponseCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Answer a prompt within a pod (once per prompt and pod)."""
    response = response_service.create_response(
        user_id=current_user.id,
        prompt_id=response_data.prompt_id,
        pod_id=response_data.pod_id,
        content=response_data.content,
        image_url=response_data.image_url,
        db=db
    )
    return response_service.to_response_out(response)


@router.get("/pods/{pod_id}/responses", response_model=List[ResponseWithDetails])
async def list_pod_responses(
    pod_id: int,
    prompt_id: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the pod feed (latest first)."""
    return response_service.get_pod_responses(pod_id, current_user.id, db, prompt_id=prompt_id)


@router.post("/responses/{response_id}/like", response_model=LikeResponse)
async def like_response(
    response_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Like a response."""
    return response_service.like_response(response_id, current_user.id, db)


@router.delete("/responses/{response_id}/like", response_model=UnlikeResult)
async def unlike_response(
    response_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a like from a response."""
    success = response_service.unlike_response(response_id, current_user.id, db)
    return UnlikeResult(success=success)
