"""In-memory blacklist of tokens invalidated by logout.

Raw token strings are kept in a process-local mapping guarded by a lock.
Entries are never evicted unless ``sweep_expired`` is called, which only
happens when TOKEN_BLACKLIST_SWEEP_INTERVAL is configured.

Limitation: the blacklist resets on restart and is not shared between
processes, so a logout on one instance does not revoke the token on
another. Running several instances would need an external store.
"""

import threading
import time

import jwt
from jwt.exceptions import PyJWTError


def _token_expiry(token: str) -> float | None:
    """Read the exp claim without verifying the signature."""
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except PyJWTError:
        return None
    exp = claims.get("exp")
    return float(exp) if isinstance(exp, int | float) else None


class TokenBlacklist:
    """Set of revoked token strings."""

    def __init__(self) -> None:
        self._revoked: dict[str, float | None] = {}  # token -> exp (unix timestamp)
        self._lock = threading.Lock()

    def add(self, token: str) -> None:
        """Revoke a token. Adding the same token twice has no further effect."""
        exp = _token_expiry(token)
        with self._lock:
            self._revoked.setdefault(token, exp)

    def contains(self, token: str) -> bool:
        with self._lock:
            return token in self._revoked

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.contains(token)

    def __len__(self) -> int:
        with self._lock:
            return len(self._revoked)

    def sweep_expired(self, now: float | None = None) -> int:
        """Drop entries whose embedded expiry has passed. Returns count removed.

        Tokens without a readable exp claim are kept.
        """
        now = time.time() if now is None else now
        with self._lock:
            expired = [
                token for token, exp in self._revoked.items() if exp is not None and now > exp
            ]
            for token in expired:
                del self._revoked[token]
            return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._revoked.clear()


_blacklist = TokenBlacklist()


def get_token_blacklist() -> TokenBlacklist:
    return _blacklist
