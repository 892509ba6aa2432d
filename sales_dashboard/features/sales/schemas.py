"""Pydantic schemas for the upstream catalog/cart payloads and the sales-data API.

Upstream models accept the Fake Store API shape (`productId`, extra fields
such as `title` or `userId` are ignored). The response model is the
`{prices, total_volumes}` document the dashboard charts consume.
"""

from __future__ import annotations

from datetime import date as date_type
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# =============================================================================
# Enums
# =============================================================================


class Category(str, Enum):
    """Product categories exposed by the upstream catalog.

    `ALL` is a sentinel meaning "no category filter".
    """

    ALL = "all"
    ELECTRONICS = "electronics"
    JEWELERY = "jewelery"
    MENS_CLOTHING = "men's clothing"
    WOMENS_CLOTHING = "women's clothing"

    @property
    def is_filter(self) -> bool:
        """True when this value restricts results to one category."""
        return self is not Category.ALL


# =============================================================================
# Upstream Models
# =============================================================================


class Product(BaseModel):
    """Catalog entry from `GET /products`."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    category: str
    price: Decimal = Field(..., ge=0, description="Unit price, non-negative.")
    title: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def float_price_as_written(cls, v: object) -> object:
        """Parse JSON floats by their shortest repr, so 22.3 becomes Decimal("22.3")."""
        if isinstance(v, float):
            return repr(v)
        return v


class CartLine(BaseModel):
    """Line item inside a cart."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    product_id: int = Field(..., alias="productId")
    quantity: int = Field(..., gt=0)


class Cart(BaseModel):
    """Order record from `GET /carts`."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: int
    date: datetime
    products: list[CartLine] = Field(default_factory=list)


# =============================================================================
# Query & Response
# =============================================================================


class SalesQuery(BaseModel):
    """Validated sales-data request.

    `start_date > end_date` is accepted and yields an empty result.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    start_date: date_type
    end_date: date_type
    category: Category = Category.ALL


SalesPoint = tuple[int, float]
VolumePoint = tuple[int, int]


class SalesDataResponse(BaseModel):
    """Two index-aligned daily series.

    Each point is `[epoch_ms, value]` where `epoch_ms` is UTC midnight of
    the day the value belongs to.
    """

    prices: list[SalesPoint] = Field(
        default_factory=list,
        description="Daily total sales (sum of price x quantity), ascending by date.",
    )
    total_volumes: list[VolumePoint] = Field(
        default_factory=list,
        description="Daily items sold (sum of quantities), aligned with `prices`.",
    )

    @model_validator(mode="after")
    def check_alignment(self) -> SalesDataResponse:
        """Both series must have the same timestamps at every index."""
        sales_ts = [ts for ts, _ in self.prices]
        volume_ts = [ts for ts, _ in self.total_volumes]
        if sales_ts != volume_ts:
            raise ValueError("prices and total_volumes must be index-aligned")
        return self


class WebhookPayload(BaseModel):
    """Body POSTed to the configured webhook after a successful aggregation."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Successfully processed sales data"
    from_date: str = Field(..., alias="from")
    to_date: str = Field(..., alias="to")
    category: str = Category.ALL.value
