from fastapi import APIRouter

from eventease.api import bookings, dashboard, event_types, events, venues

api_router = APIRouter(prefix="/api")
api_router.include_router(dashboard.router)
api_router.include_router(venues.router)
api_router.include_router(events.router)
api_router.include_router(event_types.router)
api_router.include_router(bookings.router)
