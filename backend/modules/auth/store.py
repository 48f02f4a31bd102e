from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models.user import User


class UserStore(ABC):
    """Interface for user persistence operations."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get(self, user_id: UUID) -> Optional[User]:
        ...

    @abstractmethod
    async def add(self, email: str, hashed_password: str, name: str) -> User:
        ...


class SqlAlchemyUserStore(UserStore):
    """User store on an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self._db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get(self, user_id: UUID) -> Optional[User]:
        result = await self._db.execute(select(User).where(User.id == user_id))
        return result.scalars().first()

    async def add(self, email: str, hashed_password: str, name: str) -> User:
        user = User(email=email, hashed_password=hashed_password, name=name)
        self._db.add(user)
        await self._db.commit()
        await self._db.refresh(user)
        return user
