"""Database engine and session factory.

The app, the maintenance CLI and alembic all connect through the URL from
Settings.effective_database_url, so they always agree on the async driver.
"""

import os
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from coedit_api.config import Settings, settings

DATABASE_URL_ENV = "COEDIT_API_DATABASE_URL"

engine = create_async_engine(
    settings.effective_database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


def migration_database_url() -> str | None:
    """Database URL for alembic, if one is configured in the environment.

    Read fresh so `alembic upgrade` picks up the variable at invocation time.
    Returns None when unset, leaving alembic.ini's URL in effect.
    """
    if not os.environ.get(DATABASE_URL_ENV):
        return None
    return Settings().effective_database_url
