# Data Interface Core Module
from .config import get_settings, settings
from .errors import ApiError, register_exception_handlers
from .logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "ApiError",
    "register_exception_handlers",
]
