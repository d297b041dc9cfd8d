# Data Interface Schemas
from data_interface.schemas.auth import AuthData, LoginRequest, RegisterRequest, UserResponse
from data_interface.schemas.catalog import EmployeePerformance, Product, ProductList
from data_interface.schemas.common import ApiResponse

__all__ = [
    "ApiResponse",
    "AuthData",
    "EmployeePerformance",
    "LoginRequest",
    "Product",
    "ProductList",
    "RegisterRequest",
    "UserResponse",
]
