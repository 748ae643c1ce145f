from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from goalkernel.config import settings


def async_database_url(url: str) -> str:
    """Normalize plain Postgres URLs to the asyncpg driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


engine = create_async_engine(async_database_url(settings.database_url), pool_pre_ping=True)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncSession:  # type: ignore[misc]
    """Read-only session per request; the kernel never commits."""
    async with async_session() as session:
        yield session
