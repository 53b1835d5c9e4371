"""Translate list filters into a parameterized SELECT over products."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sqlalchemy import Select, select

from marketplace.db.models.product import Product


# largest value a signed 64-bit LIMIT parameter can carry
MAX_LIMIT = 2**63 - 1


class SortOrder(str, Enum):
    NEWEST = "newest"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"

    @classmethod
    def parse(cls, value: str | None) -> "SortOrder":
        """Map a raw sort key to a SortOrder; unknown keys mean newest first."""
        try:
            return cls(value)
        except ValueError:
            return cls.NEWEST


@dataclass(frozen=True)
class ListingFilters:
    category: str | None = None
    sort: str | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        if self.limit is not None and not 1 <= self.limit <= MAX_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_LIMIT}")


def build_listing_query(filters: ListingFilters) -> Select:
    """Build the listing SELECT for ``filters``.

    Every user-supplied value (category and limit included) ends up as a
    bound parameter. Ties are broken by id, newest row first.
    """
    query = select(Product)

    if filters.category:
        query = query.where(Product.category == filters.category)

    order = SortOrder.parse(filters.sort)
    if order is SortOrder.PRICE_LOW:
        query = query.order_by(Product.price.asc(), Product.id.desc())
    elif order is SortOrder.PRICE_HIGH:
        query = query.order_by(Product.price.desc(), Product.id.desc())
    else:
        query = query.order_by(Product.created_at.desc(), Product.id.desc())

    if filters.limit is not None:
        query = query.limit(filters.limit)

    return query
