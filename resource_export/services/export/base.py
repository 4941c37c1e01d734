"""
Export dataclasses — configuration and action responses.

  - ``ExportConfig``:     long-lived definition of one export action.
  - ``DownloadResponse``: successful export, rendered as a download link.
  - ``DangerResponse``:   failed export, rendered as an error banner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from sqlalchemy import Date, DateTime, Select, Table

# Receives the base ``SELECT * FROM table`` and returns the query to export.
CustomQuery = Callable[[Select], Select]

DEFAULT_RANGE_COLUMN = "created_at"


@dataclass
class ExportConfig:
    """
    Definition of one export action.

    Built once per resource by the builder methods of
    ``ExportResourceAction`` and reused by every invocation.
    """
    resource_label: str
    table: Table
    only: List[str] = field(default_factory=list)
    except_: List[str] = field(default_factory=list)
    user_selection: bool = False
    range_column: str = DEFAULT_RANGE_COLUMN
    date_range: bool = False
    stream: bool = False
    custom_query: Optional[CustomQuery] = None
    destination_disk: Optional[str] = None
    file_name: Optional[str] = None

    @property
    def table_name(self) -> str:
        return self.table.name

    @property
    def available_columns(self) -> List[str]:
        """Column names in schema order."""
        return [c.name for c in self.table.columns]

    def is_temporal(self, column: str) -> bool:
        """``True`` if *column* is declared as DATE / DATETIME / TIMESTAMP."""
        return isinstance(self.table.c[column].type, (Date, DateTime))


@dataclass(slots=True)
class DownloadResponse:
    """Location of the exported file plus the name shown to the user."""
    download: str
    name: str

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"download": self.download, "name": self.name}


@dataclass(slots=True)
class DangerResponse:
    """User-visible failure message."""
    danger: str

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"danger": self.danger}


ActionResponse = Union[DownloadResponse, DangerResponse]
