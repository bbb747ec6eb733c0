"""
Database lifecycle

Owns the async engine and session factory. Constructed by the application
factory and torn down on shutdown.
"""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, uri: str, echo: bool = False):
        self.uri = uri
        self.engine: AsyncEngine = create_async_engine(uri, echo=echo, future=True)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    async def create_all(self) -> None:
        # Entities must be imported so their tables are registered on the metadata
        import helpdesk.domain.entities  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("database.create_all done")

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as exc:
            logger.warning("database.ping failed: %s", exc)
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("database.disposed")
