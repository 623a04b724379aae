"""
User model for authentication and pod membership.
"""
from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship
from intouch.db.base import BaseModel


class User(BaseModel):
    """User model with immutable username."""
    __tablename__ = "users"

    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    display_name = Column(String(100), nullable=False)
    avatar = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    memberships = relationship("PodMember", back_populates="user", cascade="all, delete-orphan")
    responses = relationship("Response", back_populates="user")
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
