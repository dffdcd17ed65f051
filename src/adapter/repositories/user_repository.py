import asyncio
from typing import Awaitable, List, Optional, TypeVar
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import (
    DuplicateEmailError,
    IUserRepository,
    StoreTimeoutError,
)
from src.domain.entities import User

T = TypeVar("T")


async def bounded(awaitable: Awaitable[T], timeout: Optional[float]) -> T:
    """Await a single store round-trip, raising StoreTimeoutError past the bound"""
    if timeout is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        raise StoreTimeoutError(timeout)


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await bounded(self.session.exec(stmt), self.timeout)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await bounded(self.session.exec(stmt), self.timeout)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        try:
            await bounded(self.session.flush(), self.timeout)
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateEmailError(user.email) from exc
        await bounded(self.session.refresh(user), self.timeout)
        return user

    async def update_profile(
        self, user_id: UUID, first_name: str, last_name: str, email: str, phone: str
    ) -> int:
        """Overwrite profile fields"""
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(first_name=first_name, last_name=last_name, email=email, phone=phone)
        )
        try:
            result = await bounded(self.session.execute(stmt), self.timeout)
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateEmailError(email) from exc
        return result.rowcount

    async def update_password_hash(self, user_id: UUID, password_hash: str) -> int:
        """Replace the stored password hash"""
        stmt = update(User).where(User.id == user_id).values(password_hash=password_hash)
        result = await bounded(self.session.execute(stmt), self.timeout)
        return result.rowcount

    async def list(self, limit: int, offset: int) -> List[User]:
        """List users ordered by creation time"""
        stmt = select(User).order_by(User.created_at, User.id).limit(limit).offset(offset)
        result = await bounded(self.session.exec(stmt), self.timeout)
        return list(result.all())
