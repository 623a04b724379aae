"""
Prompt routes for the weekly prompt and per-pod progress.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from intouch.core.utils import days_left_label
from intouch.db.session import get_db
from intouch.models.user import User
from intouch.schemas.prompt import CurrentPromptResponse, PromptResponse, PromptWithStats
from intouch.services.pod_service import require_pod_member
from intouch.services.prompt_service import get_current_prompt, get_prompt_with_stats
from intouch.api.dependencies import get_current_user

router = APIRouter(prefix="/prompts", tags=["prompts"])


@router.get("/current", response_model=CurrentPromptResponse)
async def current_prompt(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get this week's active prompt."""
    prompt = get_current_prompt(db)
    if not prompt:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active prompt found"
        )

    return CurrentPromptResponse(
        **PromptResponse.model_validate(prompt).model_dump(),
        days_left=days_left_label(prompt.week_end)
    )


@router.get("/{prompt_id}/stats/{pod_id}", response_model=PromptWithStats)
async def prompt_stats(
    prompt_id: int,
    pod_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get how many pod members have answered a prompt."""
    require_pod_member(pod_id, current_user.id, db)

    prompt, response_count, total_members = get_prompt_with_stats(prompt_id, pod_id, db)

    return PromptWithStats(
        **PromptResponse.model_validate(prompt).model_dump(),
        response_count=response_count,
        total_members=total_members
    )
