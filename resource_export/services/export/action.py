"""
ExportResourceAction — Export a resource's table to an xlsx download.

The action is configured once per resource with builder methods and then
handles any number of runs.  Configuration mistakes (unknown range
column, non-date range column, unknown disk) raise immediately; run-time
failures come back as ``DangerResponse``.

Usage::

    action = (
        ExportResourceAction("User", "users")
        .except_(["password", "remember_token"])
        .with_user_selection()
        .uses_date_range("created_at")
        .uses_generator()
        .to_disk("s3")
    )

    action.fields()                               # inputs to render
    action.handle({"columns": '["id","email"]',
                   "from": "2024-01-01", "to": "2024-01-31"})
    # → DownloadResponse(download="https://…/exports/Users_….xlsx", name=…)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional

from sqlalchemy.engine import Engine

from resource_export.core.database import db_manager
from resource_export.core.errors import ColumnNotFoundError, RangeColumnNotDateError
from resource_export.core.storage import DiskManager, storage
from resource_export.services.export.base import (
    ActionResponse,
    CustomQuery,
    ExportConfig,
)
from resource_export.services.export.columns import column_options
from resource_export.services.export.fields import (
    ActionField,
    date_range,
    heading,
    multiselect,
)
from resource_export.services.export.naming import action_name
from resource_export.services.export.pipeline import ExportPipeline, FieldBag


class ExportResourceAction:
    """Builder-style export action for one table."""

    confirm_button_text = "Export"
    confirm_text = "Are you sure you want to perform export action ?"
    icon = "hero-download"

    def __init__(
        self,
        resource_label: str,
        table: str,
        engine: Optional[Engine] = None,
        disks: Optional[DiskManager] = None,
        on_failure: Optional[Callable[[Exception], None]] = None,
        name: Optional[str] = None,
    ) -> None:
        self.engine = engine or db_manager.engine
        self.disks = disks or storage
        self.on_failure = on_failure
        self._name = name

        self.config = ExportConfig(
            resource_label=resource_label,
            table=db_manager.reflect_table(table, self.engine),
        )
        self.pipeline = ExportPipeline(
            self.engine, disks=self.disks, on_failure=self.fail,
        )

    # ─────────────────────────────────────────────────────────────
    #  METADATA
    # ─────────────────────────────────────────────────────────────

    def name(self) -> str:
        return self._name or action_name(self.config.resource_label)

    def label(self) -> str:
        return self.name()

    def fields(self) -> List[ActionField]:
        """Inputs the host renders before running the action."""
        out: List[ActionField] = []
        if self.config.user_selection:
            out.append(heading("Select the fields you want to export"))
            out.append(
                multiselect(
                    "Columns",
                    "columns",
                    column_options(self.config),
                    placeholder="Columns to export",
                    required=True,
                    reorderable=True,
                )
            )
        if self.config.date_range:
            out.append(
                heading(
                    "Select the date or date range. <br> Leave empty to export all.",
                    as_html=True,
                )
            )
            out.append(date_range("Date range", ["from", "to"]))
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name(),
            "label": self.label(),
            "confirm_text": self.confirm_text,
            "confirm_button_text": self.confirm_button_text,
            "icon": self.icon,
            "fields": [f.to_dict() for f in self.fields()],
        }

    # ─────────────────────────────────────────────────────────────
    #  BUILDER
    # ─────────────────────────────────────────────────────────────

    def only(self, columns: Iterable[str] = ()) -> "ExportResourceAction":
        self.config.only = list(columns)
        return self

    def except_(self, columns: Iterable[str] = ()) -> "ExportResourceAction":
        self.config.except_ = list(columns)
        return self

    def with_user_selection(self) -> "ExportResourceAction":
        self.config.user_selection = True
        return self

    def uses_generator(self) -> "ExportResourceAction":
        """Stream rows from a server-side cursor instead of loading them."""
        self.config.stream = True
        return self

    def uses_date_range(self, column: Optional[str] = None) -> "ExportResourceAction":
        """
        Enable the date-range input on *column* (default ``created_at``).

        Raises ``ColumnNotFoundError`` / ``RangeColumnNotDateError`` now,
        not when the action runs.
        """
        column = column or self.config.range_column
        if column not in self.config.available_columns:
            raise ColumnNotFoundError(
                f"Column {column} does not exist in {self.config.table_name} table"
            )
        if not self.config.is_temporal(column):
            raise RangeColumnNotDateError(
                f"Range column {column} must be declared as a date or datetime column"
            )
        self.config.range_column = column
        self.config.date_range = True
        return self

    def query_builder(self, query: CustomQuery) -> "ExportResourceAction":
        """Replace the default column SELECT with ``query(base_select)``."""
        self.config.custom_query = query
        return self

    def file_name(self, name: str) -> "ExportResourceAction":
        self.config.file_name = name
        return self

    def to_disk(self, disk: str) -> "ExportResourceAction":
        """Store finished exports on *disk* (validated now)."""
        self.disks.disk(disk)
        self.config.destination_disk = disk
        return self

    # ─────────────────────────────────────────────────────────────
    #  RUN
    # ─────────────────────────────────────────────────────────────

    def handle(self, fields: FieldBag = None) -> ActionResponse:
        return self.pipeline.run(self.config, fields)

    def fail(self, exc: Exception) -> None:
        """Report a failed run to the failure collaborator."""
        if self.on_failure is not None:
            self.on_failure(exc)
