from fastapi import APIRouter

from app.api.v1.endpoints import meetings, places

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(meetings.router)
api_router.include_router(places.router)
