"""
Response service for creating, listing and liking pod responses.
"""
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
from typing import List, Optional
import logging
from intouch.core.exceptions import ConflictException, NotFoundException, ValidationException
from intouch.core.utils import time_ago_label
from intouch.models.response import Response, ResponseLike, ResponseComment
from intouch.schemas.pod import MemberUser, PodResponse
from intouch.schemas.response import (
    ResponseOut, ResponseWithDetails, CommentResponse,
    encode_content, decode_content
)
from intouch.services.pod_service import require_pod_member
from intouch.services.prompt_service import get_prompt

logger = logging.getLogger(__name__)

DUPLICATE_RESPONSE_MESSAGE = "You have already responded to this prompt"


def get_response(response_id: int, db: Session) -> Optional[Response]:
    """Get a response by id."""
    return db.query(Response).filter(Response.id == response_id).first()


def get_response_or_404(response_id: int, db: Session) -> Response:
    """Get a response by id or raise NotFoundException."""
    response = get_response(response_id, db)
    if not response:
        raise NotFoundException("Response")
    return response


def get_user_response_for_prompt(
    user_id: int,
    prompt_id: int,
    pod_id: int,
    db: Session
) -> Optional[Response]:
    """Get a user's response to a prompt within a pod, if any."""
    return db.query(Response).filter(
        Response.user_id == user_id,
        Response.prompt_id == prompt_id,
        Response.pod_id == pod_id
    ).first()


def create_response(
    user_id: int,
    prompt_id: int,
    pod_id: int,
    content,
    db: Session,
    image_url: Optional[str] = None
) -> Response:
    """
    Create a response to a prompt in a pod.

    The caller must be a pod member and may respond at most once per
    (prompt, pod). The unique constraint on responses backs up the existence
    check when two requests race.
    """
    require_pod_member(pod_id, user_id, db)

    if not get_prompt(prompt_id, db):
        raise NotFoundException("Prompt")

    if get_user_response_for_prompt(user_id, prompt_id, pod_id, db):
        raise ConflictException(DUPLICATE_RESPONSE_MESSAGE)

    response = Response(
        prompt_id=prompt_id,
        pod_id=pod_id,
        user_id=user_id,
        content=encode_content(content),
        image_url=image_url,
        is_visible=True
    )
    db.add(response)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictException(DUPLICATE_RESPONSE_MESSAGE)
    db.refresh(response)

    logger.info(f"User {user_id} responded to prompt {prompt_id} in pod {pod_id}")
    return response


def count_response_likes(response_id: int, db: Session) -> int:
    """Count likes on a response."""
    return db.query(func.count(ResponseLike.id)).filter(
        ResponseLike.response_id == response_id
    ).scalar()


def get_like(response_id: int, user_id: int, db: Session) -> Optional[ResponseLike]:
    """Get a user's like on a response, if any."""
    return db.query(ResponseLike).filter(
        ResponseLike.response_id == response_id,
        ResponseLike.user_id == user_id
    ).first()


def get_response_likes(response_id: int, db: Session) -> List[ResponseLike]:
    """Get all likes on a response."""
    return db.query(ResponseLike).filter(
        ResponseLike.response_id == response_id
    ).order_by(ResponseLike.created_at).all()


def like_response(response_id: int, user_id: int, db: Session) -> ResponseLike:
    """
    Like a response on behalf of a pod member.
    Liking an already liked response returns the existing like.
    """
    response = get_response_or_404(response_id, db)
    require_pod_member(response.pod_id, user_id, db)

    existing = get_like(response_id, user_id, db)
    if existing:
        return existing

    like = ResponseLike(response_id=response_id, user_id=user_id)
    db.add(like)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request inserted the same like first
        db.rollback()
        winner = get_like(response_id, user_id, db)
        if not winner:
            raise ConflictException("Like changed concurrently, please retry")
        return winner
    db.refresh(like)
    return like


def unlike_response(response_id: int, user_id: int, db: Session) -> bool:
    """Remove a user's like. Returns False when there was nothing to remove."""
    response = get_response_or_404(response_id, db)
    require_pod_member(response.pod_id, user_id, db)

    deleted = db.query(ResponseLike).filter(
        ResponseLike.response_id == response_id,
        ResponseLike.user_id == user_id
    ).delete(synchronize_session=False)
    db.commit()
    return deleted > 0


def add_comment(response_id: int, user_id: int, text: str, db: Session) -> ResponseComment:
    """Append a comment to a response on behalf of a pod member."""
    if not text or not text.strip():
        raise ValidationException("Comment cannot be empty")

    response = get_response_or_404(response_id, db)
    require_pod_member(response.pod_id, user_id, db)

    comment = ResponseComment(response_id=response_id, user_id=user_id, content=text)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def get_response_comments(response_id: int, db: Session) -> List[ResponseComment]:
    """Get comments on a response with their authors, oldest first."""
    return db.query(ResponseComment).options(
        joinedload(ResponseComment.user)
    ).filter(
        ResponseComment.response_id == response_id
    ).order_by(ResponseComment.created_at, ResponseComment.id).all()


def to_response_out(response: Response) -> ResponseOut:
    """Build the API view of a stored response."""
    return ResponseOut(
        id=response.id,
        prompt_id=response.prompt_id,
        pod_id=response.pod_id,
        user_id=response.user_id,
        content=decode_content(response.content),
        image_url=response.image_url,
        is_visible=response.is_visible,
        created_at=response.created_at
    )


def get_pod_responses(
    pod_id: int,
    viewer_id: int,
    db: Session,
    prompt_id: Optional[int] = None
) -> List[ResponseWithDetails]:
    """
    Get visible responses for a pod, newest first, optionally for one prompt.
    is_liked reflects the viewer's own likes only.
    """
    require_pod_member(pod_id, viewer_id, db)

    query = db.query(Response).options(
        joinedload(Response.user),
        joinedload(Response.pod)
    ).filter(
        Response.pod_id == pod_id,
        Response.is_visible.is_(True)
    )
    if prompt_id is not None:
        query = query.filter(Response.prompt_id == prompt_id)

    responses = query.order_by(Response.created_at.desc(), Response.id.desc()).all()

    result = []
    for response in responses:
        comments = get_response_comments(response.id, db)
        result.append(ResponseWithDetails(
            **to_response_out(response).model_dump(),
            user=MemberUser.model_validate(response.user),
            pod=PodResponse.model_validate(response.pod),
            likes_count=count_response_likes(response.id, db),
            comments_count=len(comments),
            is_liked=get_like(response.id, viewer_id, db) is not None,
            time_ago=time_ago_label(response.created_at),
            comments=[CommentResponse.model_validate(c) for c in comments]
        ))

    return result
