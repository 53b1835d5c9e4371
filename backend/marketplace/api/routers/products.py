"""CRUD + filtering endpoints for product listings."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

from marketplace.api.dependencies.db import get_listing_service
from marketplace.api.schemas.product import (
    ProductDeleteResponse,
    ProductRead,
    ProductWrite,
)
from marketplace.core.security import require_admin
from marketplace.services.listing_query import MAX_LIMIT, ListingFilters
from marketplace.services.listing_service import ListingService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    summary="List products with optional category filter, sort and limit",
    response_model=list[ProductRead],
)
def list_products(
    category: str | None = Query(None, description="Exact, case-sensitive category"),
    sort: str | None = Query(
        None, description="price_low, price_high or newest (default)"
    ),
    limit: int | None = Query(
        None, ge=1, le=MAX_LIMIT, description="Maximum number of products"
    ),
    service: ListingService = Depends(get_listing_service),
) -> list[ProductRead]:
    """Return products newest first unless a price sort is requested."""
    filters = ListingFilters(category=category, sort=sort, limit=limit)
    return [ProductRead.model_validate(p) for p in service.list(filters)]


@router.get(
    "/{product_id}",
    summary="Get a single product",
    response_model=ProductRead,
)
def get_product(
    product_id: int,
    service: ListingService = Depends(get_listing_service),
) -> ProductRead:
    return ProductRead.model_validate(service.get(product_id))


@router.post(
    "",
    summary="Create a product listing",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductRead,
)
def create_product(
    payload: ProductWrite,
    service: ListingService = Depends(get_listing_service),
) -> ProductRead:
    """Persist a listing posted from the marketplace form.

    name, description, price and category are required; image is optional.
    """
    product = service.create(payload.model_dump())
    return ProductRead.model_validate(product)


@router.put(
    "/{product_id}",
    summary="Replace an existing product",
    response_model=ProductRead,
    dependencies=[Depends(require_admin)],
)
def update_product(
    product_id: int,
    payload: ProductWrite,
    service: ListingService = Depends(get_listing_service),
) -> ProductRead:
    """Replace every field of a product. Same required fields as create."""
    product = service.update(product_id, payload.model_dump())
    return ProductRead.model_validate(product)


@router.delete(
    "/{product_id}",
    summary="Delete a product",
    response_model=ProductDeleteResponse,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: int,
    service: ListingService = Depends(get_listing_service),
) -> ProductDeleteResponse:
    """Hard delete a product and echo its final state back to the caller."""
    product = service.delete(product_id)
    return ProductDeleteResponse(
        success=True, deletedProduct=ProductRead.model_validate(product)
    )
