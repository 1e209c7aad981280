"""Routes API / API routes."""

from fastapi import APIRouter

from fuellog.api import (
    auth,
    vehicles,
    tanks,
    entries,
    budget,
    dashboard,
    exports,
)

api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(tanks.router, prefix="/vehicles/{vehicle_id}/tanks", tags=["tanks"])
api_router.include_router(entries.router, prefix="/vehicles/{vehicle_id}/entries", tags=["entries"])
api_router.include_router(budget.router, prefix="/budget", tags=["budget"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(exports.router, prefix="/exports", tags=["exports"])
