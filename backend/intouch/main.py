"""
FastAPI entrypoint for InTouch backend application.
"""
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from intouch.core.config import settings
from intouch.core.exceptions import InTouchException
from intouch.db.session import SessionLocal, init_db
from intouch.db.seed import seed_database
from intouch.api.router import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed demo data on startup."""
    init_db()
    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_database(db)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error seeding database: {e}", exc_info=True)
        finally:
            db.close()
    yield


app = FastAPI(
    title="InTouch API",
    description="Backend API for weekly prompts shared within friend pods",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InTouchException)
async def intouch_exception_handler(request: Request, exc: InTouchException):
    """Convert application exceptions to JSON responses."""
    logger.warning(
        f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "InTouch API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
