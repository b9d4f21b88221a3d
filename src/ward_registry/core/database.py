"""Process-wide async engine and session factory for the registry database."""

from loguru import logger
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory created by :func:`init_engine`.

    Raises:
        RuntimeError: If the engine has not been initialized.
    """
    if _session_factory is None:
        msg = "Session factory not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _session_factory


def init_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create the engine and session factory used by the API and the CLI.

    Server databases get connection liveness checks; SQLite keeps the
    driver defaults.

    Args:
        database_url: Async SQLAlchemy connection string.
        echo: Log every SQL statement.

    Returns:
        The created async engine.
    """
    global _engine, _session_factory  # noqa: PLW0603
    url = make_url(database_url)
    pre_ping = url.get_backend_name() != "sqlite"
    _engine = create_async_engine(url, echo=echo, pool_pre_ping=pre_ping)
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    logger.info("Registry database: {}", url.render_as_string(hide_password=True))
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
