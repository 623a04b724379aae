"""
Pydantic schemas for Response entity, its content variants, likes and comments.
"""
from pydantic import BaseModel, Field, TypeAdapter
from typing import Annotated, List, Literal, Optional, Union
from datetime import datetime
from intouch.schemas.pod import MemberUser, PodResponse


class HighLowContent(BaseModel):
    """The week's high point and low point."""
    kind: Literal["high-low"] = "high-low"
    high: str = Field(..., min_length=1, max_length=2000)
    low: str = Field(..., min_length=1, max_length=2000)


class TextContent(BaseModel):
    """A free-text answer."""
    kind: Literal["text"] = "text"
    text: str = Field(..., min_length=1, max_length=4000)


ResponseContent = Annotated[Union[HighLowContent, TextContent], Field(discriminator="kind")]

content_adapter = TypeAdapter(ResponseContent)


def encode_content(content: Union[HighLowContent, TextContent]) -> str:
    """Serialize response content for storage."""
    return content.model_dump_json()


def decode_content(raw: str) -> Union[HighLowContent, TextContent]:
    """Parse stored response content back into its variant."""
    return content_adapter.validate_json(raw)


class ResponseCreate(BaseModel):
    """Schema for response creation."""
    prompt_id: int
    pod_id: int
    content: ResponseContent
    image_url: Optional[str] = Field(None, max_length=500)


class ResponseOut(BaseModel):
    """Schema for a stored response."""
    id: int
    prompt_id: int
    pod_id: int
    user_id: int
    content: ResponseContent
    image_url: Optional[str] = None
    is_visible: bool
    created_at: datetime


class LikeResponse(BaseModel):
    """Schema for a like record."""
    id: int
    response_id: int
    user_id: int
    created_at: datetime

    class Config:
        from_attributes = True


class UnlikeResult(BaseModel):
    """Whether a like was removed."""
    success: bool


class CommentResponse(BaseModel):
    """Schema for a comment with its author."""
    id: int
    response_id: int
    user_id: int
    content: str
    created_at: datetime
    user: MemberUser

    class Config:
        from_attributes = True


class ResponseWithDetails(ResponseOut):
    """Response enriched for the pod feed."""
    user: MemberUser
    pod: PodResponse
    likes_count: int
    comments_count: int
    is_liked: bool
    time_ago: str
    comments: List[CommentResponse] = []
