"""
User endpoints
==============

POST /api/v1/auth/login                 -- exchange credentials for a token
GET  /api/v1/user/info                  -- the caller's profile and addresses
POST /api/v1/user/logout                -- revoke the current token
PUT  /api/v1/user/info                  -- partial profile update
POST /api/v1/user/address               -- add an address
PUT  /api/v1/user/address/{address_id}  -- partial address update
GET  /api/v1/user/restaurant-distance   -- distance from an address to a restaurant
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rms.api.dependencies import bearer_token, get_current_user, get_db
from rms.api.middleware import limiter
from rms.api.schemas import (
    AddressCreateRequest,
    AddressResponse,
    AddressUpdateRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RestaurantDistanceResponse,
    UpdateProfileRequest,
    UserInfoResponse,
    UserResponse,
)
from rms.config import settings
from rms.domain.addresses import find_address
from rms.domain.distance import distance
from rms.domain.entities import UserContext
from rms.domain.errors import AuthenticationError, NotFoundError
from rms.domain.validation import (
    apply_address_update,
    apply_profile_update,
    validate_new_address,
)
from rms.infrastructure.repositories import (
    AddressRepository,
    RestaurantRepository,
    SessionRepository,
    UserRepository,
    to_restaurant,
)
from rms.infrastructure.security import (
    hash_password,
    new_session_token,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


# ── Session ───────────────────────────────────────────────────────────


@router.post(
    "/auth/login",
    status_code=201,
    response_model=LoginResponse,
    summary="Log in with email, password and role",
)
@limiter.limit(settings.rate_limit)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    found = await UserRepository(db).get_with_role(body.email, body.role)
    if not found or not verify_password(body.password, found[0].password):
        logger.info("Failed to find user: %s (%s)", body.email, body.role.value)
        raise AuthenticationError("Failed to find user")

    user, role = found
    token = new_session_token()
    await SessionRepository(db).create_session(user.id, role.id, token)

    logger.info("Login Successfully.")
    return LoginResponse(token=token, type="Bearer", message="Login Successfully.")


@router.get(
    "/user/info",
    response_model=UserInfoResponse,
    summary="Get the caller's profile",
)
@limiter.limit(settings.rate_limit)
async def get_info(
    request: Request,
    user: UserContext = Depends(get_current_user),
):
    logger.info("Get information Successfully.")
    return UserInfoResponse(
        message="Get information Successfully.",
        user=UserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            addresses=[
                AddressResponse(
                    id=a.id,
                    address=a.address,
                    state=a.state,
                    city=a.city,
                    pin_code=a.pin_code,
                    lat=a.location.latitude,
                    lng=a.location.longitude,
                )
                for a in user.addresses
            ],
        ),
    )


@router.post(
    "/user/logout",
    status_code=202,
    response_model=MessageResponse,
    summary="Revoke the current session token",
)
@limiter.limit(settings.rate_limit)
async def logout(
    request: Request,
    token: str = Depends(bearer_token),
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await SessionRepository(db).delete_by_token(token)
    logger.info("Logout Successfully. (user=%d)", user.id)
    return MessageResponse(message="Logout Successfully.")


# ── Profile ───────────────────────────────────────────────────────────


@router.put(
    "/user/info",
    status_code=201,
    response_model=MessageResponse,
    summary="Update the caller's name, email or password",
    description="Omitted fields keep their stored value.",
)
@limiter.limit(settings.rate_limit)
async def update_self_info(
    request: Request,
    body: UpdateProfileRequest,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    name, email, password = apply_profile_update(
        user, body.to_domain(), hash_password
    )
    await UserRepository(db).update_info(user.id, name, email, password)
    logger.info("User update successfully")
    return MessageResponse(message="User update successfully")


# ── Addresses ─────────────────────────────────────────────────────────


@router.post(
    "/user/address",
    status_code=201,
    response_model=MessageResponse,
    summary="Add an address for the caller",
)
@limiter.limit(settings.rate_limit)
async def add_address(
    request: Request,
    body: AddressCreateRequest,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    address = validate_new_address(
        body.address, body.state, body.city, body.pin_code, body.lat, body.lng
    )
    await AddressRepository(db).create_address(user.id, address)
    logger.info("Address Created successfully")
    return MessageResponse(message="Address Created successfully.")


@router.put(
    "/user/address/{address_id}",
    status_code=201,
    response_model=MessageResponse,
    summary="Update one of the caller's addresses",
    description="Omitted, null or empty fields keep their stored value.",
)
@limiter.limit(settings.rate_limit)
async def update_address(
    request: Request,
    address_id: int,
    body: AddressUpdateRequest,
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    existing = find_address(address_id, user.addresses)
    updated = apply_address_update(existing, body.to_domain())
    await AddressRepository(db).update_address(updated)
    logger.info("Address Update successfully (id=%d)", address_id)
    return MessageResponse(message="Address Update successfully")


# ── Restaurant ────────────────────────────────────────────────────────


@router.get(
    "/user/restaurant-distance",
    response_model=RestaurantDistanceResponse,
    summary="Distance from one of the caller's addresses to a restaurant",
)
@limiter.limit(settings.rate_limit)
async def get_restaurant_distance(
    request: Request,
    restaurant_id: int = Query(..., alias="restaurantId"),
    address_id: int = Query(..., alias="addressId"),
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = await RestaurantRepository(db).get_by_id(restaurant_id)
    if not row:
        raise NotFoundError("Unable to get Restaurant")
    restaurant = to_restaurant(row)

    address = find_address(address_id, user.addresses)
    result = distance(
        address.location,
        restaurant.location,
        meters_below_km=settings.distance_meters_below_km,
    )
    logger.info(
        "Restaurant Distance Calculated in %s successfully.", result.unit.value
    )
    return RestaurantDistanceResponse(
        message="Restaurant Distance Calculated successfully.",
        distance=result.distance,
        distance_unit=result.unit,
    )
