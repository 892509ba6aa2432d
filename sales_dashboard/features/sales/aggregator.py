"""Daily sales/volume aggregation over the upstream catalog and carts.

Joins each cart line to its product, filters by date range and category,
and reduces the result into per-day buckets.

Rules:
- A cart belongs to the UTC calendar date of its timestamp.
- The date range is inclusive on both ends; the whole end day is included.
- Lines whose product is unknown are skipped silently.
- Days with no qualifying line are omitted, not zero-filled.
- Duplicate product ids in the catalog resolve last-write-wins.

CRITICAL: `aggregate` is pure. It performs no I/O and no logging.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, time
from datetime import date as date_type
from decimal import Decimal

from sales_dashboard.features.sales.schemas import (
    Cart,
    Category,
    Product,
    SalesDataResponse,
    SalesPoint,
    VolumePoint,
)


@dataclass
class DailyBucket:
    """Accumulated totals for one calendar day.

    Attributes:
        day: Calendar date (UTC).
        total_sales: Sum of price x quantity.
        items_sold: Sum of quantities.
    """

    day: date_type
    total_sales: Decimal = field(default_factory=lambda: Decimal("0"))
    items_sold: int = 0

    def add(self, price: Decimal, quantity: int) -> None:
        self.total_sales += price * quantity
        self.items_sold += quantity


@dataclass
class AggregatedSeries:
    """Index-aligned daily series produced by `aggregate`."""

    sales: list[SalesPoint] = field(default_factory=list)
    volume: list[VolumePoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.sales)

    def to_response(self) -> SalesDataResponse:
        return SalesDataResponse(prices=self.sales, total_volumes=self.volume)


def cart_day(cart: Cart) -> date_type:
    """Return the UTC calendar date of a cart's timestamp.

    Naive timestamps are treated as UTC.
    """
    ts = cart.date
    if ts.tzinfo is None:
        return ts.date()
    return ts.astimezone(UTC).date()


def epoch_ms(day: date_type) -> int:
    """Epoch milliseconds of UTC midnight for `day`."""
    return int(datetime.combine(day, time.min, tzinfo=UTC).timestamp() * 1000)


def build_product_index(products: Iterable[Product]) -> dict[int, Product]:
    """Map product id to product. Later duplicates replace earlier ones."""
    return {product.id: product for product in products}


def bucket_by_day(
    products: Iterable[Product],
    orders: Iterable[Cart],
    start_date: date_type,
    end_date: date_type,
    category: Category | str | None = None,
) -> dict[date_type, DailyBucket]:
    """Group qualifying cart lines into per-day buckets.

    Args:
        products: Upstream catalog.
        orders: Upstream carts.
        start_date: First day included.
        end_date: Last day included.
        category: Category filter; `None` or `Category.ALL` disables it.

    Returns:
        Buckets keyed by day, only for days with at least one qualifying line.
    """
    if start_date > end_date:
        return {}

    wanted = Category(category) if category is not None else Category.ALL
    index = build_product_index(products)
    buckets: dict[date_type, DailyBucket] = {}

    for cart in orders:
        day = cart_day(cart)
        if day < start_date or day > end_date:
            continue

        for line in cart.products:
            product = index.get(line.product_id)
            if product is None:
                continue
            if wanted.is_filter and product.category != wanted.value:
                continue

            bucket = buckets.get(day)
            if bucket is None:
                bucket = buckets[day] = DailyBucket(day=day)
            bucket.add(product.price, line.quantity)

    return buckets


def aggregate(
    products: Iterable[Product],
    orders: Iterable[Cart],
    start_date: date_type,
    end_date: date_type,
    category: Category | str | None = None,
) -> AggregatedSeries:
    """Aggregate carts into daily sales and volume series.

    Args:
        products: Upstream catalog.
        orders: Upstream carts.
        start_date: First day included.
        end_date: Last day included (whole day).
        category: Category filter; `None` or `Category.ALL` disables it.

    Returns:
        Two series sorted ascending by day, aligned index by index.

    Example:
        A cart on 2020-03-02 with a 10.00 product x2 and a 5.00 product x1,
        both electronics, filtered on electronics, gives
        sales [[1583107200000, 25.0]] and volume [[1583107200000, 3]].
    """
    buckets = bucket_by_day(products, orders, start_date, end_date, category)

    series = AggregatedSeries()
    for day in sorted(buckets):
        bucket = buckets[day]
        ts = epoch_ms(day)
        series.sales.append((ts, float(bucket.total_sales)))
        series.volume.append((ts, bucket.items_sold))

    return series
