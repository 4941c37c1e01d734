"""
Resource export pipeline.

Modules:
  base          : ExportConfig and the download / danger responses.
  fields        : Invocation field parsing and field descriptors.
  columns       : Column resolution (only / except / user selection).
  sql_clauses   : Date-range WHERE and ORDER BY clauses.
  query_builder : SELECT and pre-flight COUNT construction.
  repository    : Query execution, eager or streamed.
  export        : Row normalization and xlsx serialization.
  naming        : Action and file names.
  pipeline      : Orchestrates one export run.
  action        : Builder-style ExportResourceAction.
  registry      : Resource key → action lookup.
"""

from resource_export.services.export.action import ExportResourceAction
from resource_export.services.export.base import (
    DangerResponse,
    DownloadResponse,
    ExportConfig,
)
from resource_export.services.export.pipeline import ExportPipeline
from resource_export.services.export.registry import ExportRegistry, export_registry

__all__ = [
    "ExportResourceAction",
    "ExportConfig",
    "ExportPipeline",
    "ExportRegistry",
    "export_registry",
    "DownloadResponse",
    "DangerResponse",
]
