from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from shared.config import settings


def _normalize_url(url: str) -> str:
    url = url.replace("postgresql://", "postgresql+asyncpg://")
    # asyncpg takes ssl as a connect arg, not a query param
    return url.split("?sslmode=")[0] if "?sslmode=" in url else url


def make_engine(url: str) -> AsyncEngine:
    return create_async_engine(
        _normalize_url(url),
        echo=settings.LOG_LEVEL == "DEBUG",
    )


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


engine = make_engine(settings.DATABASE_URL) if settings.DATABASE_URL else None

async_session = make_sessionmaker(engine) if engine else None
