"""Models package - Import all models for SQLAlchemy registration."""
from intouch.models.user import User
from intouch.models.pod import Pod, PodMember
from intouch.models.prompt import Prompt
from intouch.models.response import Response, ResponseLike, ResponseComment
from intouch.models.session import UserSession

__all__ = [
    "User",
    "Pod",
    "PodMember",
    "Prompt",
    "Response",
    "ResponseLike",
    "ResponseComment",
    "UserSession",
]
