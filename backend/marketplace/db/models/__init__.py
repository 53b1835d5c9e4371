"""Database models package."""
from marketplace.db.models.product import Product

__all__ = ["Product"]
