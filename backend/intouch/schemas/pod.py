"""
Pydantic schemas for Pod entity.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class PodBase(BaseModel):
    """Base pod schema."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class PodCreate(PodBase):
    """Schema for pod creation."""
    pass


class PodResponse(PodBase):
    """Schema for pod response."""
    id: int
    created_by: int
    is_active: bool

    class Config:
        from_attributes = True


class PodSummary(PodResponse):
    """Pod as seen by one of its members."""
    member_count: int
    is_admin: bool


class MemberUser(BaseModel):
    """Public user details shown in member lists."""
    id: int
    username: str
    display_name: str
    avatar: Optional[str] = None

    class Config:
        from_attributes = True


class PodMemberResponse(BaseModel):
    """Schema for pod member response."""
    id: int
    pod_id: int
    user_id: int
    is_admin: bool
    joined_at: datetime
    user: MemberUser

    class Config:
        from_attributes = True


class MemberInvite(BaseModel):
    """Schema for adding a member by username."""
    username: str = Field(..., min_length=1)
    is_admin: bool = False


class PodActivity(BaseModel):
    """Per-pod activity summary."""
    id: int
    name: str
    member_count: int
    activity: str


class InsightsResponse(BaseModel):
    """Aggregate view across the caller's pods."""
    total_pods: int
    total_members: int
    avg_members_per_pod: int
    current_prompt_title: Optional[str] = None
    pods: List[PodActivity] = []
