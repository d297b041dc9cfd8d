# Data Interface Services
from data_interface.services.auth import AuthService
from data_interface.services.token_blacklist import TokenBlacklist, get_token_blacklist
from data_interface.services.user_store import UserStore

__all__ = [
    "AuthService",
    "TokenBlacklist",
    "UserStore",
    "get_token_blacklist",
]
