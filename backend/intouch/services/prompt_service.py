"""
Prompt service for the weekly prompt and its per-pod progress.
"""
from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import datetime
from typing import Optional, Tuple
import logging
from intouch.core.exceptions import NotFoundException
from intouch.models.prompt import Prompt
from intouch.models.response import Response
from intouch.services.pod_service import count_pod_members

logger = logging.getLogger(__name__)


def get_current_prompt(db: Session) -> Optional[Prompt]:
    """
    Get the current prompt: the active prompt with the latest week_start.
    Returns None when no prompt is active.
    """
    return db.query(Prompt).filter(
        Prompt.is_active.is_(True)
    ).order_by(Prompt.week_start.desc(), Prompt.id.desc()).first()


def get_prompt(prompt_id: int, db: Session) -> Optional[Prompt]:
    """Get a prompt by id."""
    return db.query(Prompt).filter(Prompt.id == prompt_id).first()


def create_prompt(
    title: str,
    prompt_type: str,
    week_start: datetime,
    week_end: datetime,
    db: Session,
    description: Optional[str] = None,
    is_active: bool = True
) -> Prompt:
    """Create a new prompt."""
    prompt = Prompt(
        title=title,
        description=description,
        type=prompt_type,
        is_active=is_active,
        week_start=week_start,
        week_end=week_end
    )
    db.add(prompt)
    db.commit()
    db.refresh(prompt)

    logger.info(f"Created prompt {prompt.id} ({prompt.title!r})")
    return prompt


def count_prompt_responses(prompt_id: int, pod_id: int, db: Session) -> int:
    """Count responses to a prompt in a pod, hidden ones included."""
    return db.query(func.count(Response.id)).filter(
        Response.prompt_id == prompt_id,
        Response.pod_id == pod_id
    ).scalar()


def get_prompt_with_stats(prompt_id: int, pod_id: int, db: Session) -> Tuple[Prompt, int, int]:
    """
    Get a prompt with (response_count, total_members) for a pod.
    Raises NotFoundException for an unknown prompt.
    """
    prompt = get_prompt(prompt_id, db)
    if not prompt:
        raise NotFoundException("Prompt")

    return (
        prompt,
        count_prompt_responses(prompt_id, pod_id, db),
        count_pod_members(pod_id, db),
    )
