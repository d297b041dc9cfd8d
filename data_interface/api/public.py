"""Endpoints that need no authentication."""

import time
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Query

from data_interface.core import settings
from data_interface.schemas.catalog import EmployeePerformance, HealthData, ProductList
from data_interface.schemas.common import ApiResponse
from data_interface.services.catalog import (
    filter_employee_performance,
    filter_products,
    parse_float_bound,
    parse_int_bound,
)

router = APIRouter(prefix="/public", tags=["public"])

_started_at = time.monotonic()


@router.get("/products", response_model=ApiResponse[ProductList])
def list_products(
    category: str | None = None,
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
) -> ApiResponse[ProductList]:
    """List products, optionally filtered by category and price range."""
    products = filter_products(
        category=category,
        min_price=parse_float_bound(min_price),
        max_price=parse_float_bound(max_price),
    )
    return ApiResponse(
        message="Products retrieved successfully",
        data=ProductList(count=len(products), products=products),
    )


@router.get("/health", response_model=ApiResponse[HealthData])
def health_check() -> ApiResponse[HealthData]:
    """Health check endpoint."""
    return ApiResponse(
        message="API is running",
        data=HealthData(
            status="healthy",
            timestamp=datetime.now(UTC).isoformat(),
            uptime=round(time.monotonic() - _started_at, 3),
            environment=settings.environment,
        ),
    )


@router.get("/employee-performance", response_model=list[EmployeePerformance])
def get_employee_performance(
    emp_id: str | None = None,
    pos_code: str | None = None,
    min_achievement: str | None = Query(None, alias="minAchievement"),
) -> list[dict[str, Any]]:
    """Employee performance records, filtered by query parameters."""
    return filter_employee_performance(
        emp_id=emp_id,
        pos_code=pos_code,
        min_achievement=parse_int_bound(min_achievement),
    )
