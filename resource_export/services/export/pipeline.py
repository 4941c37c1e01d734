"""
ExportPipeline — Thin orchestrator for one export run.

Steps:
  1. parse fields, resolve columns, build the query;
  2. pre-flight count (zero rows fails before any file exists);
  3. fetch (eager) or stream (lazy) normalized records;
  4. write ``exports/<name>.xlsx`` on the staging disk;
  5. move the file to the destination disk when it differs;
  6. return a download descriptor.

``run`` never raises: every failure is reported to ``on_failure`` and
returned as a ``DangerResponse``, even when ``on_failure`` itself fails.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from sqlalchemy.engine import Engine

from resource_export.core.errors import (
    EmptyResultError,
    SerializationError,
    StorageError,
)
from resource_export.core.storage import DiskManager, LocalDisk, storage
from resource_export.services.export.base import (
    ActionResponse,
    DangerResponse,
    DownloadResponse,
    ExportConfig,
)
from resource_export.services.export.columns import resolve_columns
from resource_export.services.export.export import write_workbook
from resource_export.services.export.fields import ExportFields
from resource_export.services.export.naming import export_path, generate_file_name
from resource_export.services.export.query_builder import ExportQueryBuilder
from resource_export.services.export.repository import ExportRepository

logger = logging.getLogger(__name__)

FAILURE_PREFIX = "An error occurred while exporting data. "

FieldBag = Union[ExportFields, Mapping[str, Any], None]


class ExportPipeline:
    """
    Runs ``ExportConfig`` definitions against one engine and one set of
    disks.  Holds no per-run state.
    """

    def __init__(
        self,
        engine: Engine,
        disks: Optional[DiskManager] = None,
        on_failure: Optional[Callable[[Exception], None]] = None,
        batch_size: Optional[int] = None,
    ) -> None:
        self.engine = engine
        self.disks = disks or storage
        self.on_failure = on_failure
        self.repository = ExportRepository(engine, batch_size=batch_size)

    # ─────────────────────────────────────────────────────────────
    #  ENTRY POINTS
    # ─────────────────────────────────────────────────────────────

    def run(self, config: ExportConfig, fields: FieldBag = None) -> ActionResponse:
        """Export and convert any failure into a ``DangerResponse``."""
        try:
            return self.export(config, fields)
        except Exception as exc:
            logger.error(
                f"[ExportPipeline] {config.table_name}: export failed: {exc}",
                exc_info=exc,
            )
            self.report_failure(exc)
            return DangerResponse(danger=FAILURE_PREFIX + str(exc))

    def report_failure(self, exc: Exception) -> None:
        """Hand *exc* to ``on_failure``; a raising callback is only logged."""
        if self.on_failure is None:
            return
        try:
            self.on_failure(exc)
        except Exception:
            logger.exception("[ExportPipeline] failure callback raised")

    def export(self, config: ExportConfig, fields: FieldBag = None) -> DownloadResponse:
        """Export, raising on failure."""
        parsed = ExportFields.from_bag(fields)

        columns = resolve_columns(config, parsed)
        logger.debug(f"[ExportPipeline] {config.table_name}: columns={columns}")

        records = self.get_query_data(config, parsed, columns)

        file_name = generate_file_name(
            config.resource_label, config.file_name, now=datetime.now(),
        )
        relative = export_path(file_name)
        self.stage(records, relative)

        location = self.resolve_storage(relative, config.destination_disk)
        logger.info(
            f"[ExportPipeline] {config.table_name}: exported to {location}"
        )
        return DownloadResponse(download=location, name=file_name)

    # ─────────────────────────────────────────────────────────────
    #  STEPS
    # ─────────────────────────────────────────────────────────────

    def get_query_data(
        self,
        config: ExportConfig,
        fields: ExportFields,
        columns: list,
    ) -> Iterable[dict]:
        """Build the query, check it matches rows, return the records."""
        query = ExportQueryBuilder(config).build(columns, fields)

        if self.repository.count(query) == 0:
            raise EmptyResultError("No records matching selection")

        if config.stream:
            return self.repository.stream(query)
        return self.repository.fetch_all(query)

    def staging_disk(self) -> LocalDisk:
        disk = self.disks.disk()
        if not isinstance(disk, LocalDisk):
            raise StorageError(
                f"Staging disk {disk.name!r} must be a local disk"
            )
        return disk

    def stage(self, records: Iterable[dict], relative: str) -> str:
        """Write *records* to *relative* on the staging disk."""
        disk = self.staging_disk()
        directory = relative.rpartition("/")[0]
        if directory:
            disk.make_directory(directory)

        target = disk.path(relative)
        try:
            rows = write_workbook(records, target)
        except SerializationError:
            # A partially written workbook is unusable.
            target.unlink(missing_ok=True)
            raise
        finally:
            # Releases the cursor connection of an unfinished stream.
            close = getattr(records, "close", None)
            if close is not None:
                close()
        logger.debug(f"[ExportPipeline] staged {rows} rows at {disk.name}:{relative}")
        return relative

    def resolve_storage(self, relative: str, destination: Optional[str] = None) -> str:
        """
        Return the URL of the final file.

        When *destination* differs from the staging disk the staged file
        is copied there and deleted only after the write succeeded.  A
        failed write leaves the staged file in place.
        """
        staging = self.staging_disk()
        if destination is None or destination == staging.name:
            return staging.url(relative)

        target = self.disks.disk(destination)
        content = staging.get(relative)
        if not target.put(relative, content):
            raise StorageError(
                f"Unable to write {relative} to disk {target.name}; "
                f"staged copy kept on {staging.name}"
            )

        staging.delete(relative)
        logger.debug(
            f"[ExportPipeline] moved {relative} from {staging.name} to {target.name}"
        )
        return target.url(relative)
