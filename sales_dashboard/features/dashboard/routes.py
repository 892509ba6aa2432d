"""Dashboard page and its JSON view-model."""

from datetime import date
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError as PydanticValidationError

from sales_dashboard.core.exceptions import ValidationError
from sales_dashboard.core.logging import get_logger
from sales_dashboard.features.dashboard.schemas import DashboardView
from sales_dashboard.features.dashboard.service import DashboardService
from sales_dashboard.features.dashboard.view import (
    DashboardState,
    format_currency,
    format_date_tick,
    format_detail_date,
    format_thousands,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.filters["date_tick"] = format_date_tick
templates.env.filters["detail_date"] = format_detail_date
templates.env.filters["currency"] = format_currency
templates.env.filters["thousands"] = format_thousands


def get_dashboard_service() -> DashboardService:
    return DashboardService()


def _parse_date(name: str, raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise ValidationError(
            f"Invalid {name} '{raw}'. Expected an ISO date (YYYY-MM-DD)",
            context={name: raw},
        ) from e


def parse_dashboard_state(
    start_date: str | None,
    end_date: str | None,
    category: str | None,
) -> DashboardState:
    """Apply the query-string filters to a new state; absent values keep their defaults.

    Raises:
        ValidationError: If a value is present but invalid.
    """
    changes: dict[str, object] = {}
    if start_date:
        changes["start_date"] = _parse_date("startDate", start_date)
    if end_date:
        changes["end_date"] = _parse_date("endDate", end_date)
    if category:
        changes["category"] = category

    try:
        return DashboardState().with_filters(**changes)
    except PydanticValidationError as e:
        raise ValidationError(
            f"Unknown category '{category}'",
            context={"category": category},
        ) from e


async def _build_view(
    service: DashboardService,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    selected: str | None,
) -> DashboardView:
    state = parse_dashboard_state(start_date, end_date, category)
    selected_day = _parse_date("selected", selected) if selected else None
    return await service.build_view(state, selected_day)


@router.get("", response_class=HTMLResponse, summary="Sales dashboard page")
async def dashboard_page(
    request: Request,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    category: str | None = Query(None),
    selected: str | None = Query(None, description="Day shown in the detail panel."),
    service: DashboardService = Depends(get_dashboard_service),
) -> HTMLResponse:
    """Render the dashboard.

    Submitting the filter form reloads the page without `selected`, so a
    filter change always clears the detail panel.
    """
    view = await _build_view(service, start_date, end_date, category, selected)
    return templates.TemplateResponse(
        request=request,
        name="dashboard.html",
        context={
            "view": view,
            "filters": view.filters,
            "labels": [p.date.isoformat() for p in view.points],
            "sales": [p.price for p in view.points],
            "top_labels": [p.date.isoformat() for p in view.top_days],
            "top_volumes": [p.volume for p in view.top_days],
        },
    )


@router.get("/view", response_model=DashboardView, summary="Dashboard view-model")
async def dashboard_view(
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    category: str | None = Query(None),
    selected: str | None = Query(None),
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardView:
    """Return the dashboard contents (KPIs, series, top days, selection) as JSON."""
    return await _build_view(service, start_date, end_date, category, selected)
