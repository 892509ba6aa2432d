"""Tests for the dashboard page and view-model endpoints."""

import pytest

from sales_dashboard.features.dashboard.routes import get_dashboard_service, parse_dashboard_state
from sales_dashboard.features.dashboard.service import DashboardService
from sales_dashboard.features.sales.schemas import Category


@pytest.fixture
def use_source(override_dependency):
    def _use(source) -> None:
        service = DashboardService(source=source, top_n=5)
        override_dependency(get_dashboard_service, lambda: service)

    return _use


class TestParseDashboardState:
    def test_absent_values_use_defaults(self):
        state = parse_dashboard_state(None, None, None)
        filters = state.filters

        assert state.stale is True
        assert state.selected is None
        assert filters.category is Category.ALL
        assert filters.start_date.isoformat() == "2020-03-01"
        assert filters.end_date.isoformat() == "2020-03-10"

    def test_values_override_defaults(self):
        filters = parse_dashboard_state("2020-02-01", "", "women's clothing").filters

        assert filters.start_date.isoformat() == "2020-02-01"
        assert filters.end_date.isoformat() == "2020-03-10"
        assert filters.category is Category.WOMENS_CLOTHING


class TestDashboardPage:
    @pytest.mark.asyncio
    async def test_renders_html(self, client, use_source, fake_source):
        use_source(fake_source)

        response = await client.get("/dashboard")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "Sales Dashboard" in html
        assert "Jewelry" in html
        assert "Total Items Sold" in html
        assert "50.00%" in html
        assert '"Mar 01"' in html
        assert "Details for" not in html

    @pytest.mark.asyncio
    async def test_renders_selected_day(self, client, use_source, fake_source):
        use_source(fake_source)

        response = await client.get("/dashboard", params={"selected": "2020-03-02"})

        assert response.status_code == 200
        assert "Details for 02 March, 2020" in response.text
        assert "$25.00" in response.text

    @pytest.mark.asyncio
    async def test_renders_error_message(self, client, use_source, failing_source):
        use_source(failing_source)

        response = await client.get("/dashboard")

        assert response.status_code == 200
        assert "Proxy error" in response.text
        assert "sales-chart" not in response.text

    @pytest.mark.asyncio
    async def test_renders_empty_state(self, client, use_source, empty_source):
        use_source(empty_source)

        response = await client.get(
            "/dashboard", params={"startDate": "2021-01-01", "endDate": "2021-01-31"}
        )

        assert response.status_code == 200
        assert "No sales data for the selected range." in response.text
        assert empty_source.requests[0].start_date.isoformat() == "2021-01-01"

    @pytest.mark.asyncio
    async def test_invalid_category_is_400(self, client, use_source, fake_source):
        use_source(fake_source)

        response = await client.get("/dashboard", params={"category": "toys"})

        assert response.status_code == 400
        assert "toys" in response.json()["error"]
        assert fake_source.requests == []


class TestDashboardView:
    @pytest.mark.asyncio
    async def test_returns_view_model(self, client, use_source, fake_source):
        use_source(fake_source)

        response = await client.get(
            "/dashboard/view",
            params={"category": "electronics", "selected": "2020-03-03"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["filters"]["category"] == "electronics"
        assert data["kpis"] == {"total_items_sold": 13, "sales_change_percent": 50.0}
        assert [d["volume"] for d in data["top_days"]] == [6, 4, 3]
        assert data["selected"] == {"date": "2020-03-03", "price": 75.0, "volume": 6}
        assert data["error"] is None
        assert len(data["categories"]) == 5

    @pytest.mark.asyncio
    async def test_error_in_view_model(self, client, use_source, failing_source):
        use_source(failing_source)

        response = await client.get("/dashboard/view")

        assert response.status_code == 200
        data = response.json()
        assert data["error"] == "Proxy error"
        assert data["points"] == []
        assert data["kpis"] is None

    @pytest.mark.asyncio
    async def test_invalid_selected_date_is_400(self, client, use_source, fake_source):
        use_source(fake_source)

        response = await client.get("/dashboard/view", params={"selected": "yesterday"})

        assert response.status_code == 400
