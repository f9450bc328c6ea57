import logging
from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from resources_api.core.config import settings

logger = logging.getLogger(__name__)

# asyncpg is the async driver for plain postgresql:// URLs
async_database_url = settings.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)

async_engine = create_async_engine(
    async_database_url,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

async def get_async_db() -> AsyncIterator[AsyncSession]:
    """Get async database session, one per request."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

async def ping(session: AsyncSession) -> bool:
    """Run `SELECT 1` on the session; False when the database is not reachable."""
    try:
        await session.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        return False

async def test_database_connection() -> bool:
    """Test database connection."""
    async with AsyncSessionLocal() as session:
        reachable = await ping(session)
    if reachable:
        logger.info("✅ Database connection successful")
    return reachable
