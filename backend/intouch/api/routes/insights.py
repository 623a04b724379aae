"""
Insights routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from intouch.db.session import get_db
from intouch.models.user import User
from intouch.schemas.pod import InsightsResponse
from intouch.services.insights_service import get_insights
from intouch.api.dependencies import get_current_user

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("", response_model=InsightsResponse)
async def insights(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Summarise activity across the caller's pods."""
    return get_insights(current_user.id, db)
