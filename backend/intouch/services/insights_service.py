"""
Insights service summarising the caller's pods.
"""
from sqlalchemy.orm import Session
import math
from intouch.core.utils import pod_activity_label
from intouch.schemas.pod import InsightsResponse, PodActivity
from intouch.services.pod_service import get_user_pods
from intouch.services.prompt_service import get_current_prompt


def get_insights(user_id: int, db: Session) -> InsightsResponse:
    """Aggregate member counts and activity labels across the user's pods."""
    pods = get_user_pods(user_id, db)
    current_prompt = get_current_prompt(db)

    total_pods = len(pods)
    total_members = sum(member_count for _, member_count, _ in pods)
    # Halves round up
    avg_members = math.floor(total_members / total_pods + 0.5) if total_pods > 0 else 0

    return InsightsResponse(
        total_pods=total_pods,
        total_members=total_members,
        avg_members_per_pod=avg_members,
        current_prompt_title=current_prompt.title if current_prompt else None,
        pods=[
            PodActivity(
                id=pod.id,
                name=pod.name,
                member_count=member_count,
                activity=pod_activity_label(member_count)
            )
            for pod, member_count, _ in pods
        ]
    )
