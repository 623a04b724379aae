"""
Pod service: membership checks and membership aggregates.

Every pod-scoped operation takes the caller's user id explicitly and is gated
on ``require_pod_member``; non-members get a ForbiddenException rather than a
filtered result.
"""
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
from typing import List, Optional, Tuple
import logging
from intouch.core.exceptions import ConflictException, ForbiddenException, NotFoundException
from intouch.models.pod import Pod, PodMember
from intouch.models.user import User

logger = logging.getLogger(__name__)


def get_pod(pod_id: int, db: Session) -> Optional[Pod]:
    """Get a pod by id."""
    return db.query(Pod).filter(Pod.id == pod_id).first()


def get_membership(pod_id: int, user_id: int, db: Session) -> Optional[PodMember]:
    """Get the membership row for a (pod, user) pair."""
    return db.query(PodMember).filter(
        PodMember.pod_id == pod_id,
        PodMember.user_id == user_id
    ).first()


def is_pod_member(pod_id: int, user_id: int, db: Session) -> bool:
    """Check whether a user belongs to a pod."""
    return get_membership(pod_id, user_id, db) is not None


def require_pod_member(pod_id: int, user_id: int, db: Session) -> PodMember:
    """Return the caller's membership or raise ForbiddenException."""
    membership = get_membership(pod_id, user_id, db)
    if not membership:
        raise ForbiddenException()
    return membership


def require_pod_admin(pod_id: int, user_id: int, db: Session) -> PodMember:
    """Return the caller's membership if it carries the admin flag."""
    membership = require_pod_member(pod_id, user_id, db)
    if not membership.is_admin:
        raise ForbiddenException("Only pod admins can manage members")
    return membership


def count_pod_members(pod_id: int, db: Session) -> int:
    """Count members of a pod."""
    return db.query(func.count(PodMember.id)).filter(
        PodMember.pod_id == pod_id
    ).scalar()


def get_user_pods(user_id: int, db: Session) -> List[Tuple[Pod, int, bool]]:
    """
    Get every pod the user belongs to as (pod, member_count, is_admin).
    is_admin is the flag on the user's own membership row.
    """
    memberships = db.query(PodMember).options(
        joinedload(PodMember.pod)
    ).filter(
        PodMember.user_id == user_id
    ).order_by(PodMember.joined_at, PodMember.id).all()

    return [
        (m.pod, count_pod_members(m.pod_id, db), bool(m.is_admin))
        for m in memberships
    ]


def add_pod_member(pod_id: int, user_id: int, db: Session, is_admin: bool = False) -> PodMember:
    """Add a user to a pod. Duplicate memberships are rejected."""
    member = PodMember(pod_id=pod_id, user_id=user_id, is_admin=is_admin)
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictException("User is already a member of this pod")
    db.refresh(member)

    logger.info(f"Added user {user_id} to pod {pod_id} (admin={is_admin})")
    return member


def remove_pod_member(pod_id: int, user_id: int, db: Session) -> bool:
    """
    Remove a user from a pod. Returns False when there was no membership.
    The last admin of a pod cannot be removed.
    """
    membership = get_membership(pod_id, user_id, db)
    if not membership:
        return False

    if membership.is_admin and count_pod_admins(pod_id, db) <= 1:
        raise ConflictException("A pod must keep at least one admin")

    db.delete(membership)
    db.commit()

    logger.info(f"Removed user {user_id} from pod {pod_id}")
    return True


def count_pod_admins(pod_id: int, db: Session) -> int:
    """Count admins of a pod."""
    return db.query(func.count(PodMember.id)).filter(
        PodMember.pod_id == pod_id,
        PodMember.is_admin.is_(True)
    ).scalar()


def get_pod_members(pod_id: int, db: Session) -> List[PodMember]:
    """Get members of a pod with their user loaded."""
    return db.query(PodMember).options(
        joinedload(PodMember.user)
    ).filter(
        PodMember.pod_id == pod_id
    ).order_by(PodMember.joined_at, PodMember.id).all()


def create_pod(user_id: int, name: str, description: Optional[str], db: Session) -> Pod:
    """Create a pod and add its creator as an admin member."""
    pod = Pod(name=name, description=description, created_by=user_id)
    db.add(pod)
    db.flush()

    db.add(PodMember(pod_id=pod.id, user_id=user_id, is_admin=True))
    db.commit()
    db.refresh(pod)

    logger.info(f"User {user_id} created pod {pod.id} ({pod.name!r})")
    return pod


def get_user_with_pods(user_id: int, db: Session) -> Tuple[User, List[Tuple[Pod, int, bool]]]:
    """Get a user together with their pods."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundException("User")
    return user, get_user_pods(user_id, db)
