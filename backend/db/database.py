import ssl
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from core.config import Settings


class Base(DeclarativeBase):
    pass


def async_database_url(url: str) -> str:
    """Point plain postgres URLs (as handed out by hosting providers) at asyncpg"""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


def create_engine(settings: Settings) -> AsyncEngine:
    url = async_database_url(settings.database_url)
    connect_args = {}
    if settings.database_ssl and url.startswith("postgresql+asyncpg://"):
        # Hosted Postgres presents certificates we do not pin
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        connect_args["ssl"] = ctx
    return create_async_engine(
        url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_db_and_tables(engine: AsyncEngine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
