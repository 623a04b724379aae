"""
One-time demo data seed run at startup.
"""
from datetime import datetime, timedelta
import logging
from sqlalchemy.orm import Session
from intouch.core.security import get_password_hash
from intouch.models.pod import Pod, PodMember
from intouch.models.prompt import Prompt
from intouch.models.user import User

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"username": "demo", "email": "demo@intouch.app", "password": "demo123", "display_name": "Demo User"},
    {"username": "sarah_chen", "email": "sarah@example.com", "password": "password123", "display_name": "Sarah Chen"},
    {"username": "marcus_j", "email": "marcus@example.com", "password": "password123", "display_name": "Marcus Johnson"},
    {"username": "emma_r", "email": "emma@example.com", "password": "password123", "display_name": "Emma Rodriguez"},
]


def current_week_window(now: datetime = None):
    """Return (week_start, week_end): Sunday through the following Saturday."""
    now = now or datetime.utcnow()
    days_since_sunday = (now.weekday() + 1) % 7
    week_start = now - timedelta(days=days_since_sunday)
    week_end = week_start + timedelta(days=6)
    return week_start, week_end


def seed_database(db: Session) -> bool:
    """
    Insert demo users, a demo pod and this week's prompt.
    Does nothing when any user already exists. Returns True if data was added.
    """
    if db.query(User).first():
        logger.info("Database already seeded")
        return False

    logger.info("Seeding database...")

    users = []
    for data in DEMO_USERS:
        user = User(
            username=data["username"],
            email=data["email"],
            hashed_password=get_password_hash(data["password"]),
            display_name=data["display_name"]
        )
        db.add(user)
        users.append(user)
    db.flush()

    pod = Pod(
        name="College Friends",
        description="Our awesome college friend group staying connected",
        created_by=users[0].id
    )
    db.add(pod)
    db.flush()

    # First user is admin
    for i, user in enumerate(users):
        db.add(PodMember(pod_id=pod.id, user_id=user.id, is_admin=(i == 0)))

    week_start, week_end = current_week_window()
    db.add(Prompt(
        title="What's your high and low this week?",
        description="Share a moment that made you smile and something that challenged you.",
        type="high-low",
        is_active=True,
        week_start=week_start,
        week_end=week_end
    ))

    db.commit()
    logger.info("Database seeded successfully (demo login: demo / demo123)")
    return True
