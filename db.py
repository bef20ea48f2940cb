# db.py
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from config import settings
from config.database import is_sqlite_url
from db_base import Base


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """
    SQLite ships with foreign key enforcement off; turn it on per connection
    so ON DELETE CASCADE from users to assets to maintenances actually fires.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    async_engine = create_async_engine(url, echo=echo, **kwargs)
    if is_sqlite_url(url):
        enable_sqlite_foreign_keys(async_engine)
    return async_engine


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Objects stay usable after commit; responses are built from them post-commit.
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# ---------- Engine & Session (async) ----------

engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
AsyncSessionLocal = build_sessionmaker(engine)


async def init_db() -> None:
    """
    Create missing tables from ORM metadata.

    Only used when AUTO_CREATE_TABLES is on; deployed databases are migrated
    with Alembic.
    """
    import db_models  # noqa: F401  registers the models on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ---------- FastAPI dependency ----------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, closed when the response is done."""
    async with AsyncSessionLocal() as session:
        yield session
