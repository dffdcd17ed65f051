from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.user_repository import UserRepository, bounded
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy implementation of UnitOfWork pattern

    Each statement and the commit are bounded by `timeout` seconds when set.
    """

    def __init__(self, session: AsyncSession, timeout: Optional[float] = None):
        self.session = session
        self.timeout = timeout

    async def __aenter__(self):
        self.users = UserRepository(self.session, timeout=self.timeout)
        return self

    async def __aexit__(self, *args):
        # Anything not committed inside the block is discarded
        await self.rollback()

    async def commit(self):
        await bounded(self.session.commit(), self.timeout)

    async def rollback(self):
        await self.session.rollback()
