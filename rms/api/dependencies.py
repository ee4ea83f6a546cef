"""FastAPI dependency injection helpers."""

from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from rms.domain.entities import UserContext
from rms.domain.enums import Role
from rms.infrastructure.database import async_session_factory
from rms.infrastructure.repositories import (
    AddressRepository,
    SessionRepository,
    UserRepository,
    to_address,
)


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def bearer_token(authorization: Optional[str] = Header(None)) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(status_code=401, detail="Invalid authorization header")
    return token.strip()


async def get_current_user(
    token: str = Depends(bearer_token),
    db: AsyncSession = Depends(get_db),
) -> UserContext:
    """Rebuild the caller's context (user, role, addresses) from the token."""
    session_row = await SessionRepository(db).get_by_token(token)
    if not session_row:
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    users = UserRepository(db)
    user = await users.get_by_id(session_row.user_id)
    role = await users.get_role(session_row.user_role_id)
    if not user or not role:
        raise HTTPException(status_code=401, detail="Invalid or expired session")

    addresses = await AddressRepository(db).list_for_user(user.id)
    return UserContext(
        id=user.id,
        name=user.name,
        email=user.email,
        password_hash=user.password,
        role=Role(role.role),
        user_role_id=role.id,
        addresses=[to_address(a) for a in addresses],
    )
