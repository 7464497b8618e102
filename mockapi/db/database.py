# mockapi/db/database.py

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    kwargs = {}
    # an in-memory sqlite database only exists on its one connection
    if database_url.startswith("sqlite") and (":memory:" in database_url or database_url.endswith("://")):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_async_engine(database_url, echo=echo, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def create_db_and_tables(engine: AsyncEngine):
    # registers the tables on Base.metadata
    from mockapi.models import endpoint, project, settings  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
