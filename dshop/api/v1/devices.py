"""Device catalogue endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dshop.api.deps import get_current_user, get_db
from dshop.core.permissions import require_admin
from dshop.models.user import User
from dshop.schemas.device import (
    CategoryListResponse,
    DeviceActionResponse,
    DeviceCreate,
    DeviceDetailResponse,
    DeviceListResponse,
)
from dshop.services.device_service import device_service

router = APIRouter()


@router.get("/", response_model=DeviceListResponse)
async def list_devices(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    name: str | None = Query(default=None),
    category: str | None = Query(default=None),
) -> DeviceListResponse:
    """List devices, optionally filtered by name and category."""
    devices = await device_service.list_devices(db, name=name, category=category)
    return DeviceListResponse(
        devices=[DeviceDetailResponse.model_validate(d) for d in devices],
        success="All requested devices have been listed",
    )


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CategoryListResponse:
    """List distinct device categories."""
    categories = await device_service.list_categories(db)
    return CategoryListResponse(categories=categories, success="All categories have been listed")


@router.post("/", response_model=DeviceActionResponse, status_code=status.HTTP_201_CREATED)
async def create_device(
    device_data: DeviceCreate,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DeviceActionResponse:
    """Add a new device (admin only)."""
    device = await device_service.create_device(
        db,
        admin,
        device_data.name,
        category=device_data.category,
        model=device_data.model,
        ram=device_data.ram,
        os=device_data.os,
    )
    return DeviceActionResponse(
        device=DeviceDetailResponse.model_validate(device),
        success="New device has been added",
    )


@router.delete("/{device_name}", response_model=DeviceActionResponse)
async def delete_device(
    device_name: str,
    admin: Annotated[User, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DeviceActionResponse:
    """Remove a device and its bookings (admin only)."""
    device = await device_service.delete_device(db, admin, device_name)
    return DeviceActionResponse(
        device=DeviceDetailResponse.model_validate(device),
        success=f'Device "{device.name}" has been successfully deleted',
    )
