"""Engine and session factory configuration."""

from collections.abc import Generator
import logging
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from marketplace.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the pooled engine for ``settings.database_url``.

    SQLite (local development and tests) shares one connection across threads
    when the database lives in memory; server databases get a QueuePool.
    """
    url = make_url(settings.database_url)

    if url.get_backend_name() == "sqlite":
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=False, future=True, **kwargs)

    connect_args: dict[str, Any] = {"connect_timeout": 10}
    if url.get_backend_name() == "postgresql":
        connect_args.update(
            {
                "keepalives": 1,  # Send keepalive packets
                "keepalives_idle": 30,  # Start keepalives after 30 seconds idle
                "keepalives_interval": 10,  # Send keepalive every 10 seconds
                "keepalives_count": 5,  # Close connection after 5 failed keepalives
            }
        )

    # pool_pre_ping: Test connections before using (handles stale connections)
    # pool_recycle: Recycle connections before the server drops them
    return create_engine(
        url,
        echo=False,
        future=True,
        poolclass=QueuePool,
        pool_pre_ping=True,
        pool_recycle=settings.db_pool_recycle,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        connect_args=connect_args,
    )


engine = build_engine(get_settings())

SessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
)


def get_db() -> Generator[Session, None, None]:
    """Yield a transactional session for the request lifecycle."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
