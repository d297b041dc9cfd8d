"""Authentication service for JWT-based authentication."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from jwt.exceptions import PyJWTError

from data_interface.core.config import settings
from data_interface.models.user import User
from data_interface.services.token_blacklist import TokenBlacklist, get_token_blacklist
from data_interface.services.user_store import UserExistsError, UserStore

logger = logging.getLogger(__name__)

# Argon2 password hasher with recommended parameters
# Memory: 64 MiB, Time: 3 iterations, Parallelism: 4
ph = PasswordHasher(
    time_cost=3,
    memory_cost=65536,
    parallelism=4,
    hash_len=32,
    salt_len=16,
)


class AuthError(Exception):
    """Base authentication error."""

    pass


class InvalidCredentialsError(AuthError):
    """Invalid username or password."""

    pass


class MissingAuthError(AuthError):
    """No bearer token was presented."""

    pass


class MalformedAuthError(AuthError):
    """Authorization header does not use the Bearer scheme."""

    pass


class TokenError(AuthError):
    """JWT token error."""

    pass


class TokenExpiredError(TokenError):
    """JWT token has expired."""

    pass


class InvalidTokenError(TokenError):
    """JWT token is invalid."""

    pass


class TokenRevokedError(TokenError):
    """JWT token was invalidated by logout."""

    pass


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash using constant-time comparison."""
    try:
        ph.verify(password_hash, password)
        return True
    except VerifyMismatchError:
        return False
    except (VerificationError, InvalidHashError):
        logger.warning("Password hash could not be verified")
        return False


def create_access_token(
    user_id: int,
    username: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed session token for a user."""
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.jwt_access_token_expire_hours)
    payload = {
        "userId": user_id,
        "username": username,
        "iat": now,
        "exp": now + expires_delta,
        # Keeps tokens minted in the same second distinct
        "jti": secrets.token_hex(16),
    }
    token = jwt.encode(
        payload,
        settings.effective_jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    # PyJWT 2.x returns str; older type stubs may declare bytes
    return str(token)


def decode_token(token: str) -> dict[str, Any]:
    """Verify a token's signature and expiry and return its claims."""
    try:
        payload = jwt.decode(
            token,
            settings.effective_jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except PyJWTError as e:
        raise InvalidTokenError(f"Invalid token: {e}") from e

    if not isinstance(payload.get("userId"), int) or not payload.get("username"):
        raise InvalidTokenError("Token missing user claims")
    return payload


class AuthService:
    """Service for registration, login and logout."""

    def __init__(
        self,
        store: UserStore | None = None,
        blacklist: TokenBlacklist | None = None,
    ):
        self.store = store if store is not None else UserStore.get_instance()
        self.blacklist = blacklist if blacklist is not None else get_token_blacklist()

    def register(self, username: str, password: str, email: str) -> User:
        """Create a new user.

        Raises UserExistsError when the username or email is taken.
        """
        if self.store.exists(username, email):
            raise UserExistsError("User already exists")

        user = self.store.create(
            username=username,
            password_hash=hash_password(password),
            email=email,
        )
        logger.info(
            "Registered user",
            extra={"username": user.username, "user_id": user.id, "auth_outcome": "registered"},
        )
        return user

    def authenticate(self, username: str, password: str) -> User:
        """Authenticate a user and return the user object.

        Raises InvalidCredentialsError for both "user not found" and
        "wrong password" to prevent user enumeration.
        """
        user = self.store.find_by_username(username)

        if user is None:
            # Perform a dummy hash to prevent timing attacks
            verify_password(password, hash_password("dummy"))
            raise InvalidCredentialsError("Invalid credentials")

        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("Invalid credentials")

        return user

    def create_token(self, user: User) -> str:
        return create_access_token(user.id, user.username)

    def get_user(self, user_id: int) -> User | None:
        return self.store.find_by_id(user_id)

    def logout(self, token: str) -> None:
        """Invalidate a token for the rest of the process lifetime."""
        self.blacklist.add(token)
