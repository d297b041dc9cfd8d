"""Authentication API endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status

from data_interface.core.errors import ApiError
from data_interface.schemas.auth import AuthData, LoginRequest, RegisterRequest, UserResponse
from data_interface.schemas.common import ApiResponse
from data_interface.services.auth import AuthService, InvalidCredentialsError
from data_interface.services.user_store import UserExistsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service() -> AuthService:
    """Dependency to get auth service."""
    return AuthService()


def get_current_claims(request: Request) -> dict[str, Any]:
    """Claims attached by AuthGateMiddleware.

    Only reachable on protected paths; the middleware has already rejected
    requests without a valid token.
    """
    claims = getattr(request.state, "user", None)
    if claims is None:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Authorization header is required")
    return claims


def _auth_data(user: Any, token: str) -> AuthData:
    return AuthData(token=token, user=UserResponse(**user.public_dict()))


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
)
def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[AuthData]:
    """Register a new user and return a session token.

    Returns 409 Conflict if the username or email is already taken.
    """
    if not request.username or not request.password or not request.email:
        raise ApiError(
            status.HTTP_400_BAD_REQUEST,
            "Username, password, and email are required",
        )

    try:
        user = auth_service.register(
            username=request.username,
            password=request.password,
            email=request.email,
        )
    except UserExistsError as e:
        logger.info(
            "Registration rejected",
            extra={"username": request.username, "auth_outcome": "user_exists"},
        )
        raise ApiError(status.HTTP_409_CONFLICT, "User already exists") from e

    token = auth_service.create_token(user)
    return ApiResponse(
        message="User registered successfully",
        data=_auth_data(user, token),
    )


@router.post("/login", response_model=ApiResponse[AuthData])
def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[AuthData]:
    """Authenticate and get a JWT token."""
    if not request.username or not request.password:
        raise ApiError(
            status.HTTP_400_BAD_REQUEST,
            "Username and password are required",
        )

    try:
        user = auth_service.authenticate(
            username=request.username,
            password=request.password,
        )
    except InvalidCredentialsError as e:
        logger.warning(
            "Login failed",
            extra={"username": request.username, "auth_outcome": "invalid_credentials"},
        )
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Invalid credentials") from e

    token = auth_service.create_token(user)
    logger.info(
        "User logged in",
        extra={"username": user.username, "user_id": user.id, "auth_outcome": "login"},
    )
    return ApiResponse(
        message="Login successful",
        data=_auth_data(user, token),
    )


@router.post("/logout", response_model=ApiResponse[None], response_model_exclude_none=True)
def logout(
    request: Request,
    claims: dict[str, Any] = Depends(get_current_claims),
    auth_service: AuthService = Depends(get_auth_service),
) -> ApiResponse[None]:
    """Log out the current user.

    Blacklists the presented token so it is rejected for the rest of the
    process lifetime.
    """
    auth_service.logout(request.state.token)
    logger.info(
        "User logged out",
        extra={
            "username": claims["username"],
            "user_id": claims["userId"],
            "auth_outcome": "logout",
        },
    )
    return ApiResponse(message="Logout successful. Token has been invalidated.")
