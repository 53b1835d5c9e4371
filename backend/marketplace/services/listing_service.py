"""CRUD operations over product listings."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, NoReturn

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.core.errors import NotFound, StoreUnavailable, ValidationError
from marketplace.db.models.product import Product
from marketplace.services.listing_query import ListingFilters, build_listing_query

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("name", "description", "category")
CENTS = Decimal("0.01")
# NUMERIC(10, 2) holds at most 8 integer digits
MAX_PRICE = Decimal("99999999.99")


def _clean_price(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not price.is_finite() or price < 0 or price > MAX_PRICE + CENTS:
        return None
    price = price.quantize(CENTS, rounding=ROUND_HALF_UP)
    if price > MAX_PRICE:
        return None
    return price


def clean_listing_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and normalize the mutable listing fields.

    Raises ValidationError naming every missing or invalid field.
    """
    cleaned: dict[str, Any] = {}
    invalid: list[str] = []

    for name in REQUIRED_TEXT_FIELDS:
        value = fields.get(name)
        if not isinstance(value, str) or not value.strip():
            invalid.append(name)
        else:
            cleaned[name] = value.strip()

    price = _clean_price(fields.get("price"))
    if price is None:
        invalid.append("price")
    else:
        cleaned["price"] = price

    if invalid:
        # keep the natural field order in the error message
        order = ("name", "description", "price", "category")
        raise ValidationError(sorted(invalid, key=order.index))

    image_url = fields.get("image_url")
    if isinstance(image_url, str) and image_url.strip():
        cleaned["image_url"] = image_url.strip()
    else:
        cleaned["image_url"] = None

    return cleaned


class ListingService:
    """Listing CRUD bound to one request-scoped session.

    Each operation issues a single data statement and commits it.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _store_failure(self, action: str, exc: SQLAlchemyError) -> NoReturn:
        self.db.rollback()
        logger.error(f"Database error {action}: {exc}", exc_info=True)
        raise StoreUnavailable(f"Failed {action}") from exc

    def list(self, filters: ListingFilters | None = None) -> list[Product]:
        query = build_listing_query(filters or ListingFilters())
        try:
            return list(self.db.scalars(query).all())
        except SQLAlchemyError as e:
            self._store_failure("listing products", e)

    def get(self, listing_id: int) -> Product:
        try:
            product = self.db.get(Product, listing_id)
        except SQLAlchemyError as e:
            self._store_failure(f"retrieving product {listing_id}", e)
        if product is None:
            raise NotFound(f"Product {listing_id} not found")
        return product

    def create(self, fields: Mapping[str, Any]) -> Product:
        cleaned = clean_listing_fields(fields)
        product = Product(**cleaned)
        try:
            self.db.add(product)
            self.db.commit()
            self.db.refresh(product)
        except SQLAlchemyError as e:
            self._store_failure("creating product", e)

        logger.info(f"Created product {product.id} in category {product.category!r}")
        return product

    def update(self, listing_id: int, fields: Mapping[str, Any]) -> Product:
        """Replace every mutable field of ``listing_id``."""
        cleaned = clean_listing_fields(fields)
        stmt = update(Product).where(Product.id == listing_id).values(**cleaned)
        try:
            result = self.db.execute(stmt)
            if result.rowcount == 0:
                self.db.rollback()
                raise NotFound(f"Product {listing_id} not found")
            self.db.commit()
            product = self.db.get(Product, listing_id, populate_existing=True)
        except SQLAlchemyError as e:
            self._store_failure(f"updating product {listing_id}", e)
        if product is None:
            # deleted by a concurrent request after the update committed
            raise NotFound(f"Product {listing_id} not found")

        logger.info(f"Updated product {listing_id}")
        return product

    def delete(self, listing_id: int) -> Product:
        """Remove ``listing_id`` and return the row as it was before deletion."""
        product = self.get(listing_id)
        try:
            self.db.delete(product)
            self.db.commit()
        except SQLAlchemyError as e:
            self._store_failure(f"deleting product {listing_id}", e)

        logger.info(f"Deleted product {listing_id}")
        return product
