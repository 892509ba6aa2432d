"""Tests for sales schemas."""

from datetime import UTC, date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from sales_dashboard.features.sales.schemas import (
    Cart,
    Category,
    Product,
    SalesDataResponse,
    SalesQuery,
    WebhookPayload,
)


class TestCategory:
    def test_all_is_not_a_filter(self):
        assert Category.ALL.is_filter is False
        assert Category.ELECTRONICS.is_filter is True

    def test_values_match_upstream_strings(self):
        assert Category("men's clothing") is Category.MENS_CLOTHING
        assert Category("jewelery") is Category.JEWELERY

    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError):
            Category("toys")


class TestProduct:
    def test_extra_fields_ignored(self, products_payload):
        product = Product.model_validate(products_payload[0])
        assert product.id == 1
        assert product.category == "electronics"

    def test_float_price_parsed_exactly(self):
        product = Product.model_validate({"id": 1, "price": 22.3, "category": "x"})
        assert product.price == Decimal("22.3")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product.model_validate({"id": 1, "price": -1, "category": "x"})


class TestCart:
    def test_parses_wire_format(self, carts_payload):
        cart = Cart.model_validate(carts_payload[0])

        assert cart.date == datetime(2020, 3, 2, tzinfo=UTC)
        assert [(line.product_id, line.quantity) for line in cart.products] == [(1, 2), (2, 1)]

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            Cart.model_validate(
                {"id": 1, "date": "2020-03-02T00:00:00Z", "products": [{"productId": 1, "quantity": 0}]}
            )

    def test_missing_products_defaults_to_empty(self):
        cart = Cart.model_validate({"id": 1, "date": "2020-03-02T00:00:00Z"})
        assert cart.products == []


class TestSalesQuery:
    def test_defaults_to_all(self):
        query = SalesQuery(start_date=date(2020, 3, 1), end_date=date(2020, 3, 10))
        assert query.category is Category.ALL

    def test_frozen_immutability(self):
        query = SalesQuery(start_date=date(2020, 3, 1), end_date=date(2020, 3, 10))
        with pytest.raises(ValidationError):
            query.category = Category.JEWELERY  # type: ignore[misc]


class TestSalesDataResponse:
    def test_rejects_misaligned_series(self):
        with pytest.raises(ValidationError):
            SalesDataResponse(prices=[(1, 1.0)], total_volumes=[(2, 1)])

    def test_rejects_unequal_length(self):
        with pytest.raises(ValidationError):
            SalesDataResponse(prices=[(1, 1.0), (2, 2.0)], total_volumes=[(1, 1)])

    def test_empty_is_valid(self):
        assert SalesDataResponse().model_dump() == {"prices": [], "total_volumes": []}


class TestWebhookPayload:
    def test_dumps_with_wire_names(self):
        payload = WebhookPayload(**{"from": "2020-03-01", "to": "2020-03-10"})

        assert payload.model_dump(by_alias=True) == {
            "message": "Successfully processed sales data",
            "from": "2020-03-01",
            "to": "2020-03-10",
            "category": "all",
        }
