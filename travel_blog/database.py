from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from travel_blog.config import Settings

Base = declarative_base()


class Database:
    """Store handle: one engine plus its session factory.

    Built by the application factory and handed to the services, so tests can
    point the whole app at a throwaway database.
    """

    def __init__(self, settings: Settings):
        engine_kwargs = {"echo": settings.debug, "pool_pre_ping": True}
        if settings.database_url.startswith("sqlite"):
            # aiosqlite connections are bound to the event loop that opened them
            engine_kwargs["poolclass"] = NullPool
        else:
            engine_kwargs["pool_size"] = settings.db_pool_size
            engine_kwargs["max_overflow"] = settings.db_max_overflow

        self.engine = create_async_engine(settings.database_url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def create_all(self) -> None:
        """Create tables (development and tests only)"""
        # Register the mapped classes on Base.metadata
        from travel_blog import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
        except Exception:
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()
