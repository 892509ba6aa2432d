"""API routes for the sales-data proxy."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from sales_dashboard.core.exceptions import ValidationError
from sales_dashboard.core.logging import get_logger
from sales_dashboard.features.sales.schemas import Category, SalesDataResponse, SalesQuery
from sales_dashboard.features.sales.service import SalesDataService

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["sales"])


def get_sales_service() -> SalesDataService:
    """Provide a SalesDataService built from current settings."""
    return SalesDataService()


def parse_sales_query(
    start_date: str | None,
    end_date: str | None,
    category: str | None,
) -> SalesQuery:
    """Validate raw query-string values.

    Args:
        start_date: ISO date string (required).
        end_date: ISO date string (required).
        category: Known category, "all", or absent.

    Returns:
        Validated SalesQuery.

    Raises:
        ValidationError: If a date is missing or malformed, or the category is unknown.
    """
    if not start_date or not end_date:
        raise ValidationError(
            "Missing date range parameters",
            context={"startDate": start_date, "endDate": end_date},
        )

    parsed: dict[str, date] = {}
    for name, raw in (("startDate", start_date), ("endDate", end_date)):
        try:
            parsed[name] = date.fromisoformat(raw)
        except ValueError as e:
            raise ValidationError(
                f"Invalid {name} '{raw}'. Expected an ISO date (YYYY-MM-DD)",
                context={name: raw},
            ) from e

    try:
        selected = Category(category) if category else Category.ALL
    except ValueError as e:
        valid = ", ".join(c.value for c in Category)
        raise ValidationError(
            f"Unknown category '{category}'. Valid categories: {valid}",
            context={"category": category},
        ) from e

    return SalesQuery(
        start_date=parsed["startDate"],
        end_date=parsed["endDate"],
        category=selected,
    )


@router.get(
    "/sales-data",
    response_model=SalesDataResponse,
    summary="Daily sales and items sold",
    description="""
Aggregate upstream carts into daily total sales and items sold.

**Parameters**:
- `startDate`, `endDate`: inclusive ISO dates (the whole end day counts)
- `category`: `electronics`, `jewelery`, `men's clothing`, `women's clothing`, or `all`

**Response**: `prices` and `total_volumes`, each a list of `[epoch_ms, value]`
sorted by date and aligned index by index. Days without sales are omitted.

**Errors**: 400 for missing/invalid parameters, 500 when the upstream API
cannot be read.
""",
)
async def get_sales_data(
    start_date: str | None = Query(None, alias="startDate", description="Start date (inclusive)."),
    end_date: str | None = Query(None, alias="endDate", description="End date (inclusive)."),
    category: str | None = Query(None, description="Category filter, or 'all'."),
    service: SalesDataService = Depends(get_sales_service),
) -> SalesDataResponse:
    """Return daily sales/volume series for the requested range and category."""
    query = parse_sales_query(start_date, end_date, category)
    return await service.get_sales_data(query)
