# Data Interface Models
from data_interface.models.user import User

__all__ = ["User"]
