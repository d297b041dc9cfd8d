"""Static demo datasets and their filters.

Numeric query bounds are parsed leniently: the leading number of the value is
used ("12abc" is 12, "5.5" as an integer bound is 5), and a value with no
leading number matches nothing.
"""

import math
import re
from typing import Any

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def parse_float_bound(value: str | None) -> float | None:
    """Leading decimal number of a query value; NaN when there is none.

    Empty or missing values return None, meaning "no bound".
    """
    if not value:
        return None
    match = _FLOAT_PREFIX.match(value)
    return float(match.group(1)) if match else math.nan


def parse_int_bound(value: str | None) -> int | float | None:
    """Leading integer of a query value; NaN when there is none."""
    if not value:
        return None
    match = _INT_PREFIX.match(value)
    return int(match.group(1)) if match else math.nan


PRODUCTS: list[dict[str, Any]] = [
    {"id": 1, "name": "Laptop", "price": 999, "category": "Electronics"},
    {"id": 2, "name": "Phone", "price": 699, "category": "Electronics"},
    {"id": 3, "name": "Desk", "price": 299, "category": "Furniture"},
    {"id": 4, "name": "Chair", "price": 199, "category": "Furniture"},
]

EMPLOYEE_PERFORMANCE: list[dict[str, Any]] = [
    {
        "emp_id": "DO248399",
        "emp_no": "ID24060625",
        "pos_code": "ITDIR",
        "pos_id": 4512,
        "dept_code": "DEPIT",
        "dept_id": 4511,
        "name": "adefirman",
        "achievement": 5,
    },
    {
        "emp_id": "DO248399",
        "emp_no": "ID24060625",
        "pos_code": "ITDIR",
        "pos_id": 4512,
        "dept_code": "DEPIT",
        "dept_id": 4511,
        "name": "adefirman",
        "achievement": 10,
    },
    {
        "emp_id": "DO130007",
        "emp_no": "ID00020001",
        "pos_code": "BODPD",
        "pos_id": 4506,
        "dept_code": "BOD",
        "dept_id": 4505,
        "name": "gordon",
        "achievement": 1001,
    },
]


def filter_products(
    category: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
) -> list[dict[str, Any]]:
    """Products matching a category (case-insensitive) and an inclusive price range."""
    products = list(PRODUCTS)
    if category:
        products = [p for p in products if p["category"].lower() == category.lower()]
    if min_price is not None:
        products = [p for p in products if p["price"] >= min_price]
    if max_price is not None:
        products = [p for p in products if p["price"] <= max_price]
    return products


def filter_employee_performance(
    emp_id: str | None = None,
    pos_code: str | None = None,
    min_achievement: float | None = None,
) -> list[dict[str, Any]]:
    records = list(EMPLOYEE_PERFORMANCE)
    if emp_id:
        records = [r for r in records if r["emp_id"].lower() == emp_id.lower()]
    if pos_code:
        records = [r for r in records if r["pos_code"].lower() == pos_code.lower()]
    if min_achievement is not None:
        records = [r for r in records if r["achievement"] >= min_achievement]
    return records
