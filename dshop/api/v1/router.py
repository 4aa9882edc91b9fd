"""Main API router that includes all endpoint routers."""

from fastapi import APIRouter

from dshop.api.v1 import auth, bookings, devices

api_router = APIRouter()

# Authentication
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# Bookings
api_router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])

# Devices
api_router.include_router(devices.router, prefix="/devices", tags=["Devices"])
