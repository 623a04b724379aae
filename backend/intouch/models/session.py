"""
Server-side session storage keyed by the session cookie.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from intouch.db.base import BaseModel


class UserSession(BaseModel):
    """An authenticated browser session."""
    __tablename__ = "sessions"

    sid = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="sessions")
