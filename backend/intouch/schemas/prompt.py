"""
Pydantic schemas for Prompt entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class PromptResponse(BaseModel):
    """Schema for prompt response."""
    id: int
    title: str
    description: Optional[str] = None
    type: str
    is_active: bool
    week_start: datetime
    week_end: datetime

    class Config:
        from_attributes = True


class CurrentPromptResponse(PromptResponse):
    """Current prompt with a human readable countdown."""
    days_left: str


class PromptWithStats(PromptResponse):
    """Prompt with response progress for one pod."""
    response_count: int
    total_members: int
