"""Test data and workbook helpers."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Tuple

from openpyxl import load_workbook

ORDER_COLUMNS = [
    "id",
    "customer_name",
    "status",
    "amount",
    "notes",
    "shipped_on",
    "created_at",
]

# Inserted out of chronological order on purpose.
ORDER_ROWS = [
    {"id": 1, "customer_name": "Alice", "status": "paid", "amount": 10.5,
     "notes": "first", "shipped_on": date(2024, 1, 2),
     "created_at": datetime(2024, 1, 31, 23, 59, 59)},
    {"id": 2, "customer_name": "Bob", "status": "pending", "amount": 20.0,
     "notes": None, "shipped_on": None,
     "created_at": datetime(2024, 1, 15, 12, 30, 0)},
    {"id": 3, "customer_name": "Carol", "status": "paid", "amount": 30.25,
     "notes": "gift", "shipped_on": date(2024, 1, 3),
     "created_at": datetime(2024, 1, 1, 0, 0, 0)},
    {"id": 4, "customer_name": "Dave", "status": "refunded", "amount": 5.0,
     "notes": None, "shipped_on": None,
     "created_at": datetime(2024, 2, 1, 0, 0, 0)},
    {"id": 5, "customer_name": "Eve", "status": "paid", "amount": 7.0,
     "notes": None, "shipped_on": None,
     "created_at": datetime(2023, 12, 31, 23, 59, 59)},
]


def ids_by_created_at(rows=ORDER_ROWS) -> List[int]:
    return [r["id"] for r in sorted(rows, key=lambda r: r["created_at"])]


def read_sheet(path: Path) -> List[Tuple[Any, ...]]:
    """All rows of the first sheet, header included."""
    workbook = load_workbook(path)
    try:
        return [tuple(row) for row in workbook.active.iter_rows(values_only=True)]
    finally:
        workbook.close()
