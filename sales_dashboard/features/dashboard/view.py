"""Presentation logic: KPIs, top-N view, selection state and label formatting.

Everything here is pure. State transitions return a new DashboardState.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from datetime import date as date_type
from typing import Any

from sales_dashboard.features.dashboard.schemas import (
    CATEGORY_LABELS,
    CategoryOption,
    DashboardFilters,
    DashboardKPIs,
    DashboardView,
    DayPoint,
)
from sales_dashboard.features.sales.schemas import SalesDataResponse

TOP_N_DEFAULT = 5


# =============================================================================
# Series & KPIs
# =============================================================================


def points_from_response(response: SalesDataResponse) -> list[DayPoint]:
    """Zip the two aligned series into per-day points."""
    points: list[DayPoint] = []
    for (ts, price), (_, volume) in zip(response.prices, response.total_volumes, strict=True):
        day = datetime.fromtimestamp(ts / 1000, tz=UTC).date()
        points.append(DayPoint(date=day, price=price, volume=volume))
    return points


def sales_change_percent(points: list[DayPoint]) -> float:
    """Percent change in sales from the first to the last point.

    Returns 0.0 when there are no points or the first value is not positive.
    """
    if not points:
        return 0.0
    first = points[0].price
    last = points[-1].price
    if first <= 0:
        return 0.0
    return (last - first) / first * 100


def total_volume(points: list[DayPoint]) -> int:
    return sum(p.volume for p in points)


def compute_kpis(points: list[DayPoint]) -> DashboardKPIs | None:
    """KPIs need at least two days to compare; otherwise None."""
    if len(points) < 2:
        return None
    return DashboardKPIs(
        total_items_sold=total_volume(points),
        sales_change_percent=sales_change_percent(points),
    )


def top_days_by_volume(points: list[DayPoint], n: int = TOP_N_DEFAULT) -> list[DayPoint]:
    """Highest-volume days, descending. Ties keep their original order."""
    return sorted(points, key=lambda p: p.volume, reverse=True)[:n]


# =============================================================================
# Formatting
# =============================================================================


def format_date_tick(tick: Any) -> Any:
    """Format an ISO date or datetime (string or object) as `Mar 02`.

    Anything that is not a date passes through unchanged.
    """
    if isinstance(tick, date_type):
        return tick.strftime("%b %d")
    if isinstance(tick, str):
        try:
            return datetime.fromisoformat(tick).strftime("%b %d")
        except ValueError:
            return tick
    return tick


def format_detail_date(day: date_type) -> str:
    """Long date used in the detail panel, e.g. `02 March, 2020`."""
    return day.strftime("%d %B, %Y")


def format_currency(value: float) -> str:
    return f"${value:,.2f}"


def format_thousands(value: int) -> str:
    return f"{value:,}"


# =============================================================================
# State
# =============================================================================


@dataclass(frozen=True)
class DashboardState:
    """Snapshot of what the dashboard is showing.

    Attributes:
        filters: Active filters.
        points: Series for those filters.
        selected: Day shown in the detail panel.
        error: Message to display instead of the series.
        stale: True when filters changed and the series must be refetched.
    """

    filters: DashboardFilters = field(default_factory=DashboardFilters)
    points: tuple[DayPoint, ...] = ()
    selected: DayPoint | None = None
    error: str | None = None
    stale: bool = True

    def with_filters(self, **changes: Any) -> DashboardState:
        """Apply filter changes. Clears selection and marks the series stale."""
        return replace(
            self,
            filters=self.filters.with_changes(**changes),
            selected=None,
            stale=True,
        )

    def with_points(self, points: list[DayPoint]) -> DashboardState:
        """Load a fresh series. Clears selection and any previous error."""
        return replace(self, points=tuple(points), selected=None, error=None, stale=False)

    def with_error(self, message: str) -> DashboardState:
        """Record a failed load. The series is emptied."""
        return replace(self, points=(), selected=None, error=message, stale=False)

    def select(self, day: date_type) -> DashboardState:
        """Select the point for `day`; unknown days clear the selection."""
        match = next((p for p in self.points if p.date == day), None)
        return replace(self, selected=match)

    def to_view(self, top_n: int = TOP_N_DEFAULT) -> DashboardView:
        points = list(self.points)
        return DashboardView(
            filters=self.filters,
            categories=[
                CategoryOption(
                    value=category.value,
                    label=label,
                    selected=category is self.filters.category,
                )
                for category, label in CATEGORY_LABELS.items()
            ],
            points=points,
            kpis=compute_kpis(points),
            top_days=top_days_by_volume(points, top_n),
            selected=self.selected,
            error=self.error,
        )
