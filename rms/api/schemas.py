"""Pydantic request / response schemas for the REST API.

Field constraints live in ``rms.domain.validation`` so that the error
messages match the ones the handlers log; the schemas only fix types.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from rms.domain.entities import AddressUpdate, ProfileUpdate
from rms.domain.enums import DistanceUnit, Role


# ── Requests ──────────────────────────────────────────────────────────


class LoginRequest(BaseModel):
    email: str
    password: str
    role: Role = Role.USER


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    def to_domain(self) -> ProfileUpdate:
        return ProfileUpdate(name=self.name, email=self.email, password=self.password)


class AddressCreateRequest(BaseModel):
    address: str
    state: str
    city: str
    pin_code: str
    lat: float
    lng: float


class AddressUpdateRequest(BaseModel):
    """Every field is optional; omitted, null or empty fields keep their value."""

    address: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    pin_code: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    def to_domain(self) -> AddressUpdate:
        return AddressUpdate(
            address=self.address,
            state=self.state,
            city=self.city,
            pin_code=self.pin_code,
            latitude=self.lat,
            longitude=self.lng,
        )


# ── Responses ─────────────────────────────────────────────────────────


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    token: str
    type: str = "Bearer"
    message: str


class AddressResponse(BaseModel):
    id: int
    address: str
    state: str
    city: str
    pin_code: str
    lat: float
    lng: float


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    addresses: list[AddressResponse] = []


class UserInfoResponse(BaseModel):
    message: str
    user: UserResponse


class RestaurantDistanceResponse(BaseModel):
    message: str
    distance: float = Field(..., ge=0)
    distance_unit: DistanceUnit


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
