"""Test fixtures for the dashboard presentation layer."""

from datetime import date

import pytest

from sales_dashboard.core.exceptions import UpstreamFetchError
from sales_dashboard.features.dashboard.schemas import DashboardFilters, DayPoint
from sales_dashboard.features.dashboard.service import DashboardService
from sales_dashboard.features.sales.schemas import SalesDataResponse

DAY_MS = 86_400_000
MARCH_1 = 1583020800000


@pytest.fixture
def sample_points() -> list[DayPoint]:
    """Seven consecutive days with a tie on volume 5."""
    volumes = [3, 5, 1, 9, 5, 2, 7]
    prices = [100.0, 80.0, 20.0, 300.0, 90.0, 40.0, 150.0]
    return [
        DayPoint(date=date(2020, 3, 1 + i), price=price, volume=volume)
        for i, (price, volume) in enumerate(zip(prices, volumes, strict=True))
    ]


@pytest.fixture
def sample_response() -> SalesDataResponse:
    """Three days starting 2020-03-01."""
    return SalesDataResponse(
        prices=[(MARCH_1, 50.0), (MARCH_1 + DAY_MS, 25.0), (MARCH_1 + 2 * DAY_MS, 75.0)],
        total_volumes=[(MARCH_1, 4), (MARCH_1 + DAY_MS, 3), (MARCH_1 + 2 * DAY_MS, 6)],
    )


class FakeSource:
    """In-memory SalesDataSource that records the filters it was asked for."""

    def __init__(self, response: SalesDataResponse | None = None, fail: bool = False) -> None:
        self.response = response or SalesDataResponse()
        self.fail = fail
        self.requests: list[DashboardFilters] = []

    async def fetch(self, filters: DashboardFilters) -> SalesDataResponse:
        self.requests.append(filters)
        if self.fail:
            raise UpstreamFetchError("Upstream returned HTTP 503 for products", resource="products")
        return self.response


@pytest.fixture
def fake_source(sample_response) -> FakeSource:
    return FakeSource(sample_response)


@pytest.fixture
def dashboard_service(fake_source) -> DashboardService:
    return DashboardService(source=fake_source, top_n=5)


@pytest.fixture
def failing_source() -> FakeSource:
    return FakeSource(fail=True)


@pytest.fixture
def empty_source() -> FakeSource:
    return FakeSource(SalesDataResponse())
