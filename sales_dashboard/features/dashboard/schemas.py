"""Pydantic schemas for the dashboard view.

Filters are immutable: changing one produces a new DashboardFilters.
"""

from __future__ import annotations

from datetime import date as date_type
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sales_dashboard.features.sales.schemas import Category

DEFAULT_START_DATE = date_type(2020, 3, 1)
DEFAULT_END_DATE = date_type(2020, 3, 10)

CATEGORY_LABELS: dict[Category, str] = {
    Category.ALL: "All Categories",
    Category.MENS_CLOTHING: "Men's Clothing",
    Category.WOMENS_CLOTHING: "Women's Clothing",
    Category.JEWELERY: "Jewelry",
    Category.ELECTRONICS: "Electronics",
}


class DashboardFilters(BaseModel):
    """Category and date range the dashboard is showing."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    category: Category = Category.ALL
    start_date: date_type = DEFAULT_START_DATE
    end_date: date_type = DEFAULT_END_DATE

    def with_changes(self, **changes: Any) -> DashboardFilters:
        """Return a new validated filter set with `changes` applied.

        Raises:
            pydantic.ValidationError: If a changed value is invalid.
        """
        return DashboardFilters.model_validate({**self.model_dump(), **changes})

    def to_query_params(self) -> dict[str, str]:
        """Query-string parameters for `GET /api/sales-data`."""
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "category": self.category.value,
        }


class DayPoint(BaseModel):
    """One day of the dashboard series."""

    model_config = ConfigDict(frozen=True)

    date: date_type
    price: float = Field(..., description="Total sales for the day.")
    volume: int = Field(..., description="Items sold on the day.")


class DashboardKPIs(BaseModel):
    """Summary statistics over the visible series."""

    total_items_sold: int
    sales_change_percent: float = Field(
        ...,
        description="Change in daily sales between the first and last day, in percent. "
        "0 when the first day's sales are zero.",
    )

    @property
    def is_positive(self) -> bool:
        return self.sales_change_percent >= 0


class CategoryOption(BaseModel):
    value: str
    label: str
    selected: bool = False


class DashboardView(BaseModel):
    """Everything the dashboard page renders."""

    filters: DashboardFilters
    categories: list[CategoryOption] = Field(default_factory=list)
    points: list[DayPoint] = Field(default_factory=list)
    kpis: DashboardKPIs | None = None
    top_days: list[DayPoint] = Field(default_factory=list)
    selected: DayPoint | None = None
    error: str | None = None

    @property
    def is_empty(self) -> bool:
        """No error and no qualifying days."""
        return self.error is None and not self.points
