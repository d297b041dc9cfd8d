"""Pydantic schemas for authentication API."""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Request for registration.

    Fields are optional at the schema level so that a missing value is
    reported as a 400 envelope by the endpoint rather than a 422.
    """

    username: str | None = None
    password: str | None = None
    email: str | None = None


class LoginRequest(BaseModel):
    """Request for login."""

    username: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    """Public user information."""

    id: int
    username: str
    email: str


class AuthData(BaseModel):
    """Token and user returned by register and login."""

    token: str
    user: UserResponse


class ClaimsUser(BaseModel):
    """Identity taken from the token claims."""

    id: int
    username: str


class DashboardStats(BaseModel):
    totalProducts: int
    totalOrders: int
    revenue: float


class ActivityEntry(BaseModel):
    id: int
    action: str
    timestamp: str


class DashboardData(BaseModel):
    user: ClaimsUser
    stats: DashboardStats
    recentActivity: list[ActivityEntry] = Field(default_factory=list)
