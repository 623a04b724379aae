"""
Prompt model for the recurring weekly question.
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship
from intouch.db.base import BaseModel


class Prompt(BaseModel):
    """A weekly prompt with an active window."""
    __tablename__ = "prompts"

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(30), nullable=False)  # 'high-low', 'photo', 'question', etc.
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    week_start = Column(DateTime, nullable=False, index=True)
    week_end = Column(DateTime, nullable=False)

    # Relationships
    responses = relationship("Response", back_populates="prompt")
