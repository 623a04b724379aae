"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from intouch.api.routes import auth, pods, prompts, responses, insights

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(pods.router)
api_router.include_router(prompts.router)
api_router.include_router(responses.router)
api_router.include_router(insights.router)
