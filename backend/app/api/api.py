from fastapi import APIRouter

from app.api.endpoints import session, users

api_router = APIRouter()
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(session.router, prefix="/session", tags=["session"])
