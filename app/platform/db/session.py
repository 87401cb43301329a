from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.platform.config import settings
from app.platform.db.base import Base


def _engine_options(database_url: str) -> dict:
    options = {"echo": False, "future": True, "pool_pre_ping": True}
    # SQLite has no server-side pool worth tuning
    if not database_url.startswith("sqlite"):
        options.update(
            pool_recycle=1800,
            pool_size=20,
            max_overflow=30,  # (burst capacity)
            pool_timeout=30,
        )
    return options


engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False, autocommit=False)


async def get_db():
    async with SessionLocal() as session:
        yield session


async def init_db() -> None:
    """Create tables for every model registered on Base."""
    # Imported for its side effect of registering the table on Base.metadata
    from app.features.accessibility.models.accessibility_check import AccessibilityCheck  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
