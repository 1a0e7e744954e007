# juliaydavid/api/router.py
from fastapi import APIRouter

from juliaydavid.api.endpoints import auth, calendar, content, health, images, messages, nest

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/login", tags=["auth"])
api_router.include_router(content.router, prefix="/content", tags=["content"])
api_router.include_router(images.router, prefix="/images", tags=["images"])
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
api_router.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
api_router.include_router(nest.router, prefix="/nidito", tags=["nidito"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
