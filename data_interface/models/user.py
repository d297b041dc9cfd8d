"""User model for authentication."""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """A registered user.

    Records are immutable once created; the password is only ever held
    as an Argon2 hash.
    """

    id: int
    username: str
    password_hash: str
    email: str

    def public_dict(self) -> dict[str, int | str]:
        """Fields safe to return to clients."""
        return {"id": self.id, "username": self.username, "email": self.email}

    def __repr__(self) -> str:
        return f"<User {self.username}>"
