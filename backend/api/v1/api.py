from fastapi import APIRouter

from api.v1 import auth, events

api_router = APIRouter()

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["auth"]
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"]
)
