"""Endpoints that require a valid bearer token.

AuthGateMiddleware guards the whole /api/protected subtree; handlers read
the caller's identity from the claims it attached to the request.
"""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, Query, status

from data_interface.api.auth import get_auth_service, get_current_claims
from data_interface.core.errors import ApiError
from data_interface.schemas.auth import (
    ActivityEntry,
    ClaimsUser,
    DashboardData,
    DashboardStats,
    UserResponse,
)
from data_interface.schemas.catalog import EmployeePerformance
from data_interface.schemas.common import ApiResponse
from data_interface.services.auth import AuthService
from data_interface.services.catalog import (
    PRODUCTS,
    filter_employee_performance,
    parse_int_bound,
)

router = APIRouter(
    prefix="/protected",
    tags=["protected"],
    dependencies=[Depends(get_current_claims)],
)


@router.get("/profile", response_model=ApiResponse[UserResponse])
def get_profile(
    claims: dict[str, Any] = Depends(get_current_claims),
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[UserResponse]:
    """Get the current user's profile."""
    user = auth_service.get_user(claims["userId"])
    if user is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "User not found")

    return ApiResponse(
        message="Profile retrieved successfully",
        data=UserResponse(**user.public_dict()),
    )


@router.get("/dashboard", response_model=ApiResponse[DashboardData])
def get_dashboard(
    claims: dict[str, Any] = Depends(get_current_claims),
) -> ApiResponse[DashboardData]:
    """Get dashboard data for the current user."""
    now = datetime.now(UTC).isoformat()
    return ApiResponse(
        message="Dashboard data retrieved successfully",
        data=DashboardData(
            user=ClaimsUser(id=claims["userId"], username=claims["username"]),
            stats=DashboardStats(
                totalProducts=len(PRODUCTS),
                totalOrders=42,
                revenue=15789.5,
            ),
            recentActivity=[
                ActivityEntry(id=1, action="Product viewed", timestamp=now),
                ActivityEntry(id=2, action="Login successful", timestamp=now),
            ],
        ),
    )


@router.get("/employee-performance", response_model=list[EmployeePerformance])
def get_employee_performance(
    emp_id: str | None = None,
    pos_code: str | None = None,
    min_achievement: str | None = Query(None, alias="minAchievement"),
) -> list[dict[str, Any]]:
    """Employee performance records, filtered by query parameters.

    Returned as a bare list rather than an envelope.
    """
    return filter_employee_performance(
        emp_id=emp_id,
        pos_code=pos_code,
        min_achievement=parse_int_bound(min_achievement),
    )
