"""
Pod management routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from intouch.core.exceptions import ForbiddenException, NotFoundException
from intouch.db.session import get_db
from intouch.models.pod import Pod
from intouch.models.user import User
from intouch.schemas.pod import (
    PodCreate, PodResponse, PodSummary, PodMemberResponse, MemberInvite
)
from intouch.services import pod_service
from intouch.api.dependencies import get_current_user

router = APIRouter(prefix="/pods", tags=["pods"])


def to_pod_summary(pod: Pod, member_count: int, is_admin: bool) -> PodSummary:
    """Build the member's view of a pod."""
    return PodSummary(
        **PodResponse.model_validate(pod).model_dump(),
        member_count=member_count,
        is_admin=is_admin
    )


@router.get("", response_model=List[PodSummary])
async def list_pods(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all pods for current user."""
    return [
        to_pod_summary(*entry)
        for entry in pod_service.get_user_pods(current_user.id, db)
    ]


@router.post("", response_model=PodResponse, status_code=status.HTTP_201_CREATED)
async def create_pod(
    pod_data: PodCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new pod with the caller as admin."""
    return pod_service.create_pod(current_user.id, pod_data.name, pod_data.description, db)


@router.get("/{pod_id}/members", response_model=List[PodMemberResponse])
async def get_members(
    pod_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List members of a pod the caller belongs to."""
    pod_service.require_pod_member(pod_id, current_user.id, db)
    return pod_service.get_pod_members(pod_id, db)


@router.post("/{pod_id}/members", response_model=PodMemberResponse, status_code=status.HTTP_201_CREATED)
async def add_member(
    pod_id: int,
    invite: MemberInvite,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a user to the pod by username (admins only)."""
    pod_service.require_pod_admin(pod_id, current_user.id, db)

    user = db.query(User).filter(User.username == invite.username).first()
    if not user:
        raise NotFoundException("User")

    return pod_service.add_pod_member(pod_id, user.id, db, is_admin=invite.is_admin)


@router.delete("/{pod_id}/members/{user_id}")
async def remove_member(
    pod_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a member. Admins may remove anyone; members may leave."""
    membership = pod_service.require_pod_member(pod_id, current_user.id, db)
    if user_id != current_user.id and not membership.is_admin:
        raise ForbiddenException("Only pod admins can manage members")

    if not pod_service.remove_pod_member(pod_id, user_id, db):
        raise NotFoundException("Member")

    return {"message": "Member removed successfully"}
