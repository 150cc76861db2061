from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from smartshift.core.config import get_settings

settings = get_settings()
engine = create_async_engine(settings.database_url, future=True, echo=False, pool_pre_ping=True)
async_session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session per request; callers commit explicitly."""
    async with async_session_factory() as session:
        yield session
