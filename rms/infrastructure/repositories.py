"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.  ``to_address`` / ``to_restaurant`` turn
rows into domain entities.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from geoalchemy2.functions import ST_MakePoint, ST_SetSRID

from .models import (
    AddressModel,
    RestaurantModel,
    SessionModel,
    UserModel,
    UserRoleModel,
)
from rms.domain.entities import Address, Coordinate, Restaurant
from rms.domain.enums import Role

SRID_WGS84 = 4326


def make_point(lat: float, lng: float):
    """PostGIS POINT in the SRID the geometry columns are declared with."""
    return ST_SetSRID(ST_MakePoint(lng, lat), SRID_WGS84)


def to_address(row) -> Address:
    return Address(
        id=row.id,
        address=row.address,
        state=row.state,
        city=row.city,
        pin_code=row.pin_code,
        location=Coordinate(row.lat, row.lng),
    )


def to_restaurant(row) -> Restaurant:
    return Restaurant(id=row.id, name=row.name, location=Coordinate(row.lat, row.lng))


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[UserModel]:
        return await self.session.get(UserModel, user_id)

    async def get_with_role(
        self, email: str, role: Role
    ) -> Optional[tuple[UserModel, UserRoleModel]]:
        """Return the user owning *email* together with its *role* row."""
        result = await self.session.execute(
            select(UserModel, UserRoleModel)
            .join(UserRoleModel, UserRoleModel.user_id == UserModel.id)
            .where(UserModel.email == email, UserRoleModel.role == role)
        )
        row = result.first()
        return (row[0], row[1]) if row else None

    async def get_role(self, user_role_id: int) -> Optional[UserRoleModel]:
        return await self.session.get(UserRoleModel, user_role_id)

    async def update_info(
        self, user_id: int, name: str, email: str, password: str
    ) -> None:
        await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(name=name, email=email, password=password)
        )


class SessionRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_session(
        self, user_id: int, user_role_id: int, token: str
    ) -> SessionModel:
        row = SessionModel(user_id=user_id, user_role_id=user_role_id, token=token)
        self.session.add(row)
        await self.session.flush()
        return row

    async def get_by_token(self, token: str) -> Optional[SessionModel]:
        result = await self.session.execute(
            select(SessionModel).where(SessionModel.token == token)
        )
        return result.scalar_one_or_none()

    async def delete_by_token(self, token: str) -> int:
        """Delete the session; returns the number of rows removed."""
        result = await self.session.execute(
            delete(SessionModel).where(SessionModel.token == token)
        )
        return result.rowcount or 0


class AddressRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_for_user(self, user_id: int) -> list[AddressModel]:
        result = await self.session.execute(
            select(AddressModel)
            .where(AddressModel.user_id == user_id)
            .order_by(AddressModel.id)
        )
        return list(result.scalars().all())

    async def create_address(self, user_id: int, address: Address) -> AddressModel:
        """Create an address with its PostGIS point."""
        lat, lng = address.location.latitude, address.location.longitude
        row = AddressModel(
            user_id=user_id,
            address=address.address,
            state=address.state,
            city=address.city,
            pin_code=address.pin_code,
            lat=lat,
            lng=lng,
            point=make_point(lat, lng),
        )
        self.session.add(row)
        await self.session.flush()
        return row

    async def update_address(self, address: Address) -> None:
        lat, lng = address.location.latitude, address.location.longitude
        await self.session.execute(
            update(AddressModel)
            .where(AddressModel.id == address.id)
            .values(
                address=address.address,
                state=address.state,
                city=address.city,
                pin_code=address.pin_code,
                lat=lat,
                lng=lng,
                point=make_point(lat, lng),
            )
        )


class RestaurantRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, restaurant_id: int) -> Optional[RestaurantModel]:
        return await self.session.get(RestaurantModel, restaurant_id)
