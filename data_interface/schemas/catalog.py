"""Pydantic schemas for the demo datasets."""

from pydantic import BaseModel


class Product(BaseModel):
    id: int
    name: str
    price: int | float
    category: str


class ProductList(BaseModel):
    count: int
    products: list[Product]


class EmployeePerformance(BaseModel):
    emp_id: str
    emp_no: str
    pos_code: str
    pos_id: int
    dept_code: str
    dept_id: int
    name: str
    achievement: int


class HealthData(BaseModel):
    status: str
    timestamp: str
    uptime: float
    environment: str
