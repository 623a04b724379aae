"""
Response model with likes and comments.
"""
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from intouch.db.base import BaseModel


class Response(BaseModel):
    """One user's answer to a prompt within one pod."""
    __tablename__ = "responses"
    __table_args__ = (
        UniqueConstraint("user_id", "prompt_id", "pod_id", name="uq_responses_user_prompt_pod"),
    )

    prompt_id = Column(Integer, ForeignKey("prompts.id"), nullable=False, index=True)
    pod_id = Column(Integer, ForeignKey("pods.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)  # JSON-encoded ResponseContent
    image_url = Column(String(500), nullable=True)
    is_visible = Column(Boolean, default=True, nullable=False)

    # Relationships
    prompt = relationship("Prompt", back_populates="responses")
    pod = relationship("Pod", back_populates="responses")
    user = relationship("User", back_populates="responses")
    likes = relationship("ResponseLike", back_populates="response", cascade="all, delete-orphan")
    comments = relationship(
        "ResponseComment",
        back_populates="response",
        cascade="all, delete-orphan",
        order_by="ResponseComment.created_at",
    )


class ResponseLike(BaseModel):
    """A user's like on a response."""
    __tablename__ = "response_likes"
    __table_args__ = (
        UniqueConstraint("response_id", "user_id", name="uq_response_likes_response_user"),
    )

    response_id = Column(Integer, ForeignKey("responses.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    response = relationship("Response", back_populates="likes")
    user = relationship("User")


class ResponseComment(BaseModel):
    """Append-only comment on a response."""
    __tablename__ = "response_comments"

    response_id = Column(Integer, ForeignKey("responses.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)

    # Relationships
    response = relationship("Response", back_populates="comments")
    user = relationship("User")
