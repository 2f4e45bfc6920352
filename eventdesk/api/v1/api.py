# File: eventdesk/api/v1/api.py
from fastapi import APIRouter
from eventdesk.api.v1.endpoints import organizations, events, registrations

# Create main API router
api_router = APIRouter()

api_router.include_router(
    organizations.router,
    prefix="/organizations",
    tags=["organizations"]
)

api_router.include_router(
    events.router,
    prefix="/events",
    tags=["events"]
)

api_router.include_router(
    registrations.router,
    prefix="/registrations",
    tags=["registrations"]
)
