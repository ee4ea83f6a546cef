"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 4 sample users (one admin, one sub-admin, two plain users)
  - 5 sample addresses around Bengaluru
  - 4 sample restaurants
All seeded users share the password ``password123``.
"""

import asyncio

from sqlalchemy import text

from rms.domain.enums import Role
from rms.infrastructure.database import async_session_factory, engine
from rms.infrastructure.models import (
    AddressModel,
    RestaurantModel,
    UserModel,
    UserRoleModel,
)
from rms.infrastructure.repositories import make_point
from rms.infrastructure.security import hash_password

SEED_PASSWORD = "password123"

USERS = [
    {"name": "Aarav Sharma", "email": "aarav@example.com", "roles": [Role.ADMIN, Role.USER]},
    {"name": "Priya Patel", "email": "priya@example.com", "roles": [Role.SUB_ADMIN]},
    {"name": "Rohan Mehta", "email": "rohan@example.com", "roles": [Role.USER]},
    {"name": "Sneha Gupta", "email": "sneha@example.com", "roles": [Role.USER]},
]

ADDRESSES = [
    # (user index, address, state, city, pin code, lat, lng)
    (0, "12 MG Road", "Karnataka", "Bengaluru", "560001", 12.9756, 77.6050),
    (0, "44 Indiranagar 100ft Rd", "Karnataka", "Bengaluru", "560038", 12.9719, 77.6412),
    (2, "7 Koramangala 5th Block", "Karnataka", "Bengaluru", "560095", 12.9352, 77.6245),
    (2, "21 Whitefield Main Rd", "Karnataka", "Bengaluru", "560066", 12.9698, 77.7500),
    (3, "3 Jayanagar 4th Block", "Karnataka", "Bengaluru", "560011", 12.9250, 77.5938),
]

RESTAURANTS = [
    {"name": "Vidyarthi Bhavan", "address": "Gandhi Bazaar", "lat": 12.9451, "lng": 77.5713},
    {"name": "MTR", "address": "Lalbagh Road", "lat": 12.9553, "lng": 77.5857},
    {"name": "Truffles", "address": "Koramangala", "lat": 12.9337, "lng": 77.6270},
    {"name": "Toit", "address": "Indiranagar", "lat": 12.9791, "lng": 77.6408},
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM users"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        # ── Users & roles ─────────────────────────────────────────────
        password = hash_password(SEED_PASSWORD)
        user_models = []
        for u in USERS:
            m = UserModel(name=u["name"], email=u["email"], password=password)
            session.add(m)
            user_models.append(m)
        await session.flush()

        for m, u in zip(user_models, USERS):
            for role in u["roles"]:
                session.add(UserRoleModel(user_id=m.id, role=role))
        await session.flush()
        print(f"  Created {len(user_models)} users")

        # ── Addresses ─────────────────────────────────────────────────
        for idx, line, state, city, pin, lat, lng in ADDRESSES:
            session.add(
                AddressModel(
                    user_id=user_models[idx].id,
                    address=line,
                    state=state,
                    city=city,
                    pin_code=pin,
                    lat=lat,
                    lng=lng,
                    point=make_point(lat, lng),
                )
            )
        await session.flush()
        print(f"  Created {len(ADDRESSES)} addresses")

        # ── Restaurants ───────────────────────────────────────────────
        for r in RESTAURANTS:
            session.add(
                RestaurantModel(
                    name=r["name"],
                    address=r["address"],
                    lat=r["lat"],
                    lng=r["lng"],
                    point=make_point(r["lat"], r["lng"]),
                )
            )
        await session.flush()
        print(f"  Created {len(RESTAURANTS)} restaurants")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
