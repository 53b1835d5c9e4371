"""Schema provisioning and store readiness tracking."""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from marketplace.db.base import Base
from marketplace.db import models  # noqa: F401 register tables on Base.metadata

logger = logging.getLogger(__name__)

_store_ready = False


def ensure_schema(bind: Engine) -> bool:
    """Create the products table if it does not exist yet.

    Safe to call on every start. A failure is logged and recorded as
    "not ready" instead of aborting startup.
    """
    global _store_ready
    try:
        Base.metadata.create_all(bind=bind, checkfirst=True)
    except SQLAlchemyError as e:
        logger.error(f"Schema initialization failed: {e}", exc_info=True)
        _store_ready = False
        return False

    logger.info("Products table is ready")
    _store_ready = True
    return True


def is_store_ready() -> bool:
    return _store_ready


def probe_database(bind: Engine) -> tuple[bool, str]:
    """Run ``SELECT 1`` and report (healthy, message)."""
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return False, "Database connection failed"
    return True, "Database connection successful"
