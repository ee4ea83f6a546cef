"""
Domain entities.

``UserContext`` is the authenticated caller.  It is built once per
request by the API layer and handed to every handler explicitly, so the
domain never reaches for global session state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from .enums import DistanceUnit, Role


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class DistanceResult:
    distance: float
    unit: DistanceUnit


# ── Entities ──────────────────────────────────────────────────────────


@dataclass
class Address:
    id: Optional[int] = None
    address: str = ""
    state: str = ""
    city: str = ""
    pin_code: str = ""
    location: Coordinate = field(default_factory=lambda: Coordinate(0, 0))

    def with_changes(self, **changes) -> Address:
        return replace(self, **changes)


@dataclass
class Restaurant:
    id: Optional[int] = None
    name: str = ""
    location: Coordinate = field(default_factory=lambda: Coordinate(0, 0))


@dataclass
class UserContext:
    id: int
    name: str
    email: str
    password_hash: str
    role: Role
    user_role_id: int
    addresses: list[Address] = field(default_factory=list)


# ── Partial updates ───────────────────────────────────────────────────
# ``None`` means "keep the stored value"; any other value is validated.


@dataclass(frozen=True)
class AddressUpdate:
    address: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    pin_code: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class ProfileUpdate:
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
