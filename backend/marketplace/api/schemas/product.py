"""Pydantic models describing Product payloads."""

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, Field


class ProductWrite(BaseModel):
    """Body for create and full-replacement update.

    Every field is optional at the schema level so the listing service can
    report all missing fields at once.
    """

    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    category: str | None = None
    image_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("image_url", "image"),
        description="Optional image URL (the frontend posts it as `image`)",
    )


class ProductRead(BaseModel):
    id: int
    name: str
    description: str
    price: float
    category: str
    image_url: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ProductDeleteResponse(BaseModel):
    success: bool = True
    deletedProduct: ProductRead
