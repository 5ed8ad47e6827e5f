# backend/homelist/db/db_connection.py
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

from homelist.core.settings import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL            # async (FastAPI)
SYNC_DATABASE_URL = settings.SYNC_DATABASE_URL  # sync (scripts/alembic)


def _pin_search_path(engine: Engine) -> None:
    if engine.dialect.name != "postgresql":
        return

    @event.listens_for(engine, "connect")
    def _set_search_path(dbapi_conn, conn_record):
        cur = dbapi_conn.cursor()
        try:
            cur.execute("SET search_path TO public")
        finally:
            cur.close()


# ---- async engine (web server only) ----
async_engine = None
AsyncSessionLocal = None
if DATABASE_URL:
    async_engine = create_async_engine(
        DATABASE_URL,
        echo=False,
        pool_pre_ping=True,
    )
    _pin_search_path(async_engine.sync_engine)

    AsyncSessionLocal = async_sessionmaker(
        bind=async_engine,
        autoflush=False,
        expire_on_commit=False,
        class_=AsyncSession,
    )


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    FastAPI dependency. Services receive the factory rather than a session
    because the listing query opens two sessions and runs them concurrently.
    """
    if AsyncSessionLocal is None:
        raise RuntimeError("Async engine not initialized (DATABASE_URL missing).")
    return AsyncSessionLocal


async def get_async_db():
    async with get_session_factory()() as session:
        yield session


# ---- sync engine (scripts / alembic), created on first use ----
_sync_engine = None
_SessionLocal = None


def get_sync_engine():
    global _sync_engine
    if _sync_engine is None:
        if not SYNC_DATABASE_URL:
            raise RuntimeError("SYNC_DATABASE_URL is not set. Check your .env.")
        _sync_engine = create_engine(SYNC_DATABASE_URL, echo=False, pool_pre_ping=True)
        _pin_search_path(_sync_engine)
    return _sync_engine


def SessionLocal():
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_sync_engine(), autoflush=False)
    return _SessionLocal()


async def close_db() -> None:
    # release the pool on server shutdown
    if async_engine is not None:
        await async_engine.dispose()
        logger.info("async engine disposed")
