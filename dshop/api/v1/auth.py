"""Authentication endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dshop.api.deps import (
    get_current_user,
    get_db,
    get_optional_token,
    get_token,
    user_id_from_payload,
)
from dshop.core.exceptions import AppException, NotFoundError, ValidationError
from dshop.core.middleware import login_limiter, register_limiter
from dshop.core.security import create_user_token, verify_token
from dshop.models.user import User, normalize_email
from dshop.schemas.booking import MyBookingItem
from dshop.schemas.user import AuthResponse, UserCreate, UserLogin, UserResponse
from dshop.services.booking_service import booking_service

router = APIRouter()


async def _auth_response(db: AsyncSession, user: User, token: str, success: str) -> AuthResponse:
    bookings = await booking_service.list_mine(db, user)
    return AuthResponse(
        token=token,
        user=UserResponse.model_validate(user),
        bookings=[MyBookingItem.model_validate(b) for b in bookings],
        success=success,
    )


@router.get("/", response_model=AuthResponse)
async def get_current_user_profile(
    token: Annotated[str, Depends(get_token)],
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """Get the current user, their token and confirmed bookings."""
    return await _auth_response(
        db, current_user, token, "Information about the user has been fetched"
    )


@router.post("/", response_model=AuthResponse, dependencies=[Depends(login_limiter)])
async def login(
    credentials: UserLogin,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """Login with a registered e-mail address."""
    result = await db.execute(select(User).where(User.email == credentials.email))
    user = result.scalar_one_or_none()

    if not user:
        raise NotFoundError(detail=f"User '{credentials.email}' is not registered")

    token = create_user_token(str(user.id), user.email)
    return await _auth_response(db, user, token, "User has logged in")


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(register_limiter)],
)
async def register(
    user_data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """Register a new (non-admin) user account."""
    email = normalize_email(user_data.email)
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise ValidationError(f"User '{email}' is already registered")

    user = User(
        email=email,
        first_name=user_data.first_name.strip(),
        last_name=user_data.last_name.strip(),
        is_admin=False,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ValidationError(f"User '{email}' is already registered")

    token = create_user_token(str(user.id), user.email)
    return await _auth_response(db, user, token, "User has been registered")


@router.post("/token", response_model=bool)
async def validate_token(
    db: Annotated[AsyncSession, Depends(get_db)],
    token: Annotated[str | None, Depends(get_optional_token)],
) -> bool | JSONResponse:
    """Check that a token is valid and belongs to an existing user."""
    try:
        payload = verify_token(token or "", token_type="access")
        user_id = user_id_from_payload(payload)
    except AppException:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content=False)

    result = await db.execute(select(User.id).where(User.id == user_id))
    if result.scalar_one_or_none() is None:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=False)
    return True
