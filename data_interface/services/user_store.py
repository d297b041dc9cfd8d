"""In-memory credential store."""

import logging
import threading
from typing import Optional

from data_interface.models.user import User

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "password123"
DEMO_EMAIL = "demo@example.com"


class UserExistsError(Exception):
    """Username or email is already registered."""

    pass


class UserStore:
    """Thread-safe list of registered users.

    Users are appended in registration order and never modified or removed.
    Ids are derived from the record count, so they increase monotonically.
    """

    _instance: Optional["UserStore"] = None
    _instance_lock: threading.Lock = threading.Lock()

    def __init__(self) -> None:
        self._users: list[User] = []
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> "UserStore":
        """Get the singleton instance (thread-safe), seeded with the demo user."""
        if cls._instance is None:
            with cls._instance_lock:
                # Double-check locking pattern
                if cls._instance is None:
                    cls._instance = cls._seeded()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Discard the singleton; the next get_instance() builds a fresh store."""
        with cls._instance_lock:
            cls._instance = None

    @classmethod
    def _seeded(cls) -> "UserStore":
        from data_interface.services.auth import hash_password

        store = cls()
        store.create(DEMO_USERNAME, hash_password(DEMO_PASSWORD), DEMO_EMAIL)
        logger.debug(f"User store seeded with demo user '{DEMO_USERNAME}'")
        return store

    def _find(self, predicate) -> User | None:
        return next((user for user in self._users if predicate(user)), None)

    def find_by_username(self, username: str) -> User | None:
        with self._lock:
            return self._find(lambda u: u.username == username)

    def find_by_id(self, user_id: int) -> User | None:
        with self._lock:
            return self._find(lambda u: u.id == user_id)

    def exists(self, username: str, email: str) -> bool:
        """True if either the username or the email is already taken."""
        with self._lock:
            return self._find(lambda u: u.username == username or u.email == email) is not None

    def create(self, username: str, password_hash: str, email: str) -> User:
        """Append a new user.

        The uniqueness check and the append happen under one lock, so two
        concurrent registrations of the same username cannot both succeed.
        """
        with self._lock:
            if self._find(lambda u: u.username == username or u.email == email) is not None:
                raise UserExistsError("User already exists")
            user = User(
                id=len(self._users) + 1,
                username=username,
                password_hash=password_hash,
                email=email,
            )
            self._users.append(user)
            return user

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
