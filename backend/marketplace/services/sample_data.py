"""Opt-in sample listings for demo deployments."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marketplace.db.models.product import Product

logger = logging.getLogger(__name__)

SAMPLE_LISTINGS = [
    {
        "name": "Wireless Headphones",
        "description": "Over-ear Bluetooth headphones with noise cancellation",
        "price": Decimal("89.99"),
        "category": "electronics",
        "image_url": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e",
    },
    {
        "name": "Ceramic Mug Set",
        "description": "Set of four handmade stoneware mugs",
        "price": Decimal("34.50"),
        "category": "home",
        "image_url": None,
    },
    {
        "name": "Trail Running Shoes",
        "description": "Lightweight shoes with a grippy outsole, size 42",
        "price": Decimal("120.00"),
        "category": "clothing",
        "image_url": "https://images.unsplash.com/photo-1542291026-7eec264c27ff",
    },
    {
        "name": "Desk Lamp",
        "description": "Adjustable LED desk lamp with three brightness levels",
        "price": Decimal("19.99"),
        "category": "home",
        "image_url": None,
    },
    {
        "name": "Paperback Novel Bundle",
        "description": "Five assorted science fiction paperbacks",
        "price": Decimal("25.00"),
        "category": "books",
        "image_url": None,
    },
]


def seed_sample_listings(db: Session) -> int:
    """Insert SAMPLE_LISTINGS when the products table is empty.

    Returns the number of rows inserted. Errors are logged, not raised.
    """
    try:
        existing = db.scalar(select(func.count(Product.id))) or 0
        if existing:
            logger.info(f"Skipping sample data: {existing} products already present")
            return 0
        db.add_all(Product(**listing) for listing in SAMPLE_LISTINGS)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to seed sample products: {e}", exc_info=True)
        return 0

    logger.info(f"Seeded {len(SAMPLE_LISTINGS)} sample products")
    return len(SAMPLE_LISTINGS)
