"""
Database session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from intouch.core.config import settings
from intouch.db.base import Base

engine_kwargs = {
    "echo": settings.DB_ECHO,
    "pool_pre_ping": True,
}

# SQLite connections are shared across FastAPI's threadpool
if settings.DATABASE_URL.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    engine_kwargs["pool_recycle"] = 3600

engine = create_engine(settings.DATABASE_URL, **engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    # Import all models so SQLAlchemy can register them
    import intouch.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
