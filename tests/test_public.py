"""Tests for public endpoints and the catalog filters."""

import math
from datetime import datetime

from data_interface.services.catalog import (
    EMPLOYEE_PERFORMANCE,
    PRODUCTS,
    filter_employee_performance,
    filter_products,
    parse_float_bound,
    parse_int_bound,
)


class TestFilterProducts:
    """Tests for filter_products."""

    def test_no_filters(self):
        assert filter_products() == PRODUCTS

    def test_category_case_insensitive(self):
        names = [p["name"] for p in filter_products(category="furniture")]
        assert names == ["Desk", "Chair"]

    def test_price_range_inclusive(self):
        names = [p["name"] for p in filter_products(min_price=299, max_price=699)]
        assert names == ["Phone", "Desk"]

    def test_combined(self):
        names = [p["name"] for p in filter_products(category="Electronics", max_price=700)]
        assert names == ["Phone"]

    def test_unknown_category(self):
        assert filter_products(category="Toys") == []

    def test_does_not_mutate_dataset(self):
        filter_products(category="Toys")
        assert len(PRODUCTS) == 4


class TestFilterEmployeePerformance:
    """Tests for filter_employee_performance."""

    def test_no_filters(self):
        assert filter_employee_performance() == EMPLOYEE_PERFORMANCE

    def test_pos_code(self):
        records = filter_employee_performance(pos_code="bodpd")
        assert [r["name"] for r in records] == ["gordon"]

    def test_min_achievement(self):
        records = filter_employee_performance(min_achievement=10)
        assert [r["achievement"] for r in records] == [10, 1001]

    def test_zero_min_achievement_applies(self):
        assert len(filter_employee_performance(min_achievement=0)) == 3


class TestBoundParsing:
    """Tests for parse_float_bound and parse_int_bound."""

    def test_missing_or_empty_is_no_bound(self):
        assert parse_float_bound(None) is None
        assert parse_float_bound("") is None
        assert parse_int_bound(None) is None
        assert parse_int_bound("") is None

    def test_float_leading_number(self):
        assert parse_float_bound("299") == 299
        assert parse_float_bound(" 12.5abc") == 12.5
        assert parse_float_bound("-.5") == -0.5
        assert parse_float_bound("1e3") == 1000
        assert parse_float_bound("Infinity") == math.inf

    def test_int_truncates(self):
        assert parse_int_bound("5.5") == 5
        assert parse_int_bound("10px") == 10
        assert parse_int_bound("0") == 0

    def test_no_leading_number_is_nan(self):
        assert math.isnan(parse_float_bound("abc"))
        assert math.isnan(parse_int_bound(".5"))

    def test_nan_bound_matches_nothing(self):
        assert filter_products(min_price=math.nan) == []
        assert filter_employee_performance(min_achievement=math.nan) == []


class TestPublicEndpoints:
    """Tests for the /api/public routes."""

    def test_products(self, client):
        response = client.get("/api/public/products")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Products retrieved successfully"
        assert body["data"]["count"] == 4
        assert body["data"]["products"][0] == {
            "id": 1,
            "name": "Laptop",
            "price": 999,
            "category": "Electronics",
        }

    def test_products_filtered(self, client):
        response = client.get(
            "/api/public/products",
            params={"category": "ELECTRONICS", "minPrice": "700"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["count"] == 1
        assert data["products"][0]["name"] == "Laptop"

    def test_products_unparseable_price_matches_nothing(self, client):
        response = client.get("/api/public/products", params={"minPrice": "cheap"})
        assert response.status_code == 200
        assert response.json()["data"] == {"count": 0, "products": []}

    def test_products_price_uses_leading_number(self, client):
        response = client.get("/api/public/products", params={"maxPrice": "300usd"})
        assert response.status_code == 200
        names = [p["name"] for p in response.json()["data"]["products"]]
        assert names == ["Desk", "Chair"]

    def test_products_empty_bound_ignored(self, client):
        response = client.get("/api/public/products", params={"minPrice": ""})
        assert response.json()["data"]["count"] == 4

    def test_employee_performance_fractional_min_achievement(self, client):
        response = client.get(
            "/api/public/employee-performance", params={"minAchievement": "5.5"}
        )
        assert response.status_code == 200
        assert [r["achievement"] for r in response.json()] == [5, 10, 1001]

    def test_employee_performance_unparseable_min_achievement(self, client):
        response = client.get(
            "/api/public/employee-performance", params={"minAchievement": "lots"}
        )
        assert response.status_code == 200
        assert response.json() == []

    def test_health(self, client):
        response = client.get("/api/public/health")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "API is running"
        data = body["data"]
        assert data["status"] == "healthy"
        assert data["uptime"] >= 0
        assert data["environment"] == "development"
        datetime.fromisoformat(data["timestamp"])

    def test_employee_performance(self, client):
        response = client.get(
            "/api/public/employee-performance", params={"pos_code": "ITDIR"}
        )
        assert response.status_code == 200
        records = response.json()
        assert len(records) == 2
        assert {r["emp_no"] for r in records} == {"ID24060625"}

    def test_root_lists_endpoints(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Welcome to Data Interface Mock API"
        assert body["endpoints"]["auth"]["logout"] == "POST /api/auth/logout (requires JWT)"
