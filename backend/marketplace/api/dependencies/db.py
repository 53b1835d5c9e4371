"""Database session and service dependencies."""

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from marketplace.db.session import get_db
from marketplace.services.listing_service import ListingService


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a managed SQLAlchemy session."""
    yield from get_db()


def get_listing_service(db: Session = Depends(get_session)) -> ListingService:
    return ListingService(db)
