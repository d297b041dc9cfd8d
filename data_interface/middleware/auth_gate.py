"""Bearer token authentication for protected endpoints.

Every request to a protected path must carry ``Authorization: Bearer <token>``.
The token is checked against the logout blacklist first and then verified
(signature and expiry). On success the decoded claims are attached to
``request.state.user`` and the raw token to ``request.state.token``.
Requests under a protected prefix that match no route (or no route for
their method) skip the check and get the regular 404 response.

Revoked and expired tokens get the same client message, so a client cannot
tell whether a token was logged out or simply ran out.
"""

import logging
from typing import Any

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse
from starlette.routing import Match

from data_interface.core.errors import BEARER_CHALLENGE, error_body, error_detail
from data_interface.services.auth import (
    AuthError,
    InvalidTokenError,
    MalformedAuthError,
    MissingAuthError,
    TokenExpiredError,
    TokenRevokedError,
    decode_token,
)
from data_interface.services.token_blacklist import TokenBlacklist, get_token_blacklist

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

TOKEN_INVALIDATED_MESSAGE = "Token has expired or been invalidated"
INVALID_TOKEN_MESSAGE = "Invalid token"

# Prefixes whose whole subtree requires a token
PROTECTED_PREFIXES = [
    "/api/protected",
]

# Individual endpoints that require a token
PROTECTED_PATHS = [
    "/api/auth/logout",
]


def is_protected_path(path: str) -> bool:
    """Match protected prefixes on segment boundaries (/api/protected-x is not protected)."""
    if path in PROTECTED_PATHS:
        return True
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PROTECTED_PREFIXES)


def authenticate_request(
    authorization: str | None,
    blacklist: TokenBlacklist,
) -> tuple[str, dict[str, Any]]:
    """Run the admission check for one Authorization header value.

    Returns the raw token and its decoded claims.

    Raises:
        MissingAuthError: no header, or an empty token after the prefix.
        MalformedAuthError: the header does not start with "Bearer ".
        TokenRevokedError: the token was invalidated by logout.
        InvalidTokenError: bad signature or unreadable token.
        TokenExpiredError: the token's exp has passed.
    """
    if not authorization:
        raise MissingAuthError("Authorization header is required")

    if not authorization.startswith(BEARER_PREFIX):
        raise MalformedAuthError("Invalid authorization format. Use: Bearer <token>")

    token = authorization[len(BEARER_PREFIX) :]
    if not token:
        raise MissingAuthError("Token is required")

    # Revocation wins over signature validity
    if blacklist.contains(token):
        raise TokenRevokedError("Token has been revoked")

    claims = decode_token(token)
    return token, claims


def matches_route(request: Request) -> bool:
    """True when some route accepts both the path and the method."""
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return True
    return False


def rejection_outcome(exc: AuthError) -> str:
    """Short label for the auth_outcome log field."""
    if isinstance(exc, MissingAuthError):
        return "missing_token"
    if isinstance(exc, MalformedAuthError):
        return "malformed_header"
    if isinstance(exc, InvalidTokenError):
        return "invalid"
    return "rejected"


def client_message(exc: AuthError) -> str:
    """Message shown to the client for a rejected request."""
    if isinstance(exc, TokenExpiredError | TokenRevokedError):
        return TOKEN_INVALIDATED_MESSAGE
    if isinstance(exc, InvalidTokenError):
        return INVALID_TOKEN_MESSAGE
    return str(exc)


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=error_body(message),
        headers=BEARER_CHALLENGE,
    )


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Middleware that rejects unauthenticated requests to protected paths.

    - Token must be in: Authorization: Bearer <token>
    - Returns 401 with an envelope body if the token is missing, malformed,
      revoked, invalid or expired
    - Returns 500 if the check itself fails unexpectedly
    """

    def __init__(self, app, blacklist: TokenBlacklist | None = None):
        super().__init__(app)
        self._blacklist = blacklist

    @property
    def blacklist(self) -> TokenBlacklist:
        return self._blacklist if self._blacklist is not None else get_token_blacklist()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path

        # CORS preflight requests never carry credentials; unrouted requests
        # fall through to the 404 handler
        if (
            request.method == "OPTIONS"
            or not is_protected_path(path)
            or not matches_route(request)
        ):
            return await call_next(request)

        context = {"method": request.method, "path": path}
        try:
            token, claims = authenticate_request(
                request.headers.get("Authorization"),
                self.blacklist,
            )
        except TokenExpiredError:
            logger.debug("Expired token", extra={**context, "auth_outcome": "expired"})
            return _unauthorized(TOKEN_INVALIDATED_MESSAGE)
        except TokenRevokedError:
            logger.warning(
                "Revoked token presented", extra={**context, "auth_outcome": "revoked"}
            )
            return _unauthorized(TOKEN_INVALIDATED_MESSAGE)
        except AuthError as e:
            logger.warning(
                "Request rejected",
                extra={**context, "auth_outcome": rejection_outcome(e), "reason": str(e)},
            )
            return _unauthorized(client_message(e))
        except Exception as e:
            logger.exception("Authentication error", extra={**context, "auth_outcome": "error"})
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_body("Authentication error", error=error_detail(e)),
            )

        logger.debug(
            "Request admitted",
            extra={**context, "auth_outcome": "admitted", "user_id": claims["userId"]},
        )
        request.state.user = claims
        request.state.token = token
        return await call_next(request)
