"""
Pod model for private friend groups.
"""
from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from intouch.db.base import BaseModel


class Pod(BaseModel):
    """Pod model representing a private group of friends."""
    __tablename__ = "pods"

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    creator = relationship("User")
    members = relationship("PodMember", back_populates="pod", cascade="all, delete-orphan")
    responses = relationship("Response", back_populates="pod", cascade="all, delete-orphan")


class PodMember(BaseModel):
    """Junction table for Pod and User many-to-many relationship."""
    __tablename__ = "pod_members"
    __table_args__ = (
        UniqueConstraint("pod_id", "user_id", name="uq_pod_members_pod_user"),
    )

    pod_id = Column(Integer, ForeignKey("pods.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    pod = relationship("Pod", back_populates="members")
    user = relationship("User", back_populates="memberships")
