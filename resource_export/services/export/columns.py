"""
Column resolution — which columns an export run selects.

Order of operations:
  1. available columns, or the user's selection when enabled;
  2. ``only`` filter (include wins), else ``except`` filter;
  3. refuse an empty result.

Filters keep the order of the list they are applied to.
"""

from __future__ import annotations

import json
import re
from typing import Dict, Iterable, List, Optional

from resource_export.core.errors import (
    ColumnSelectionParseError,
    EmptyColumnSelectionError,
)
from resource_export.services.export.base import ExportConfig
from resource_export.services.export.fields import ExportFields


def filter_only(columns: Iterable[str], only: Optional[Iterable[str]]) -> List[str]:
    """Keep *columns* present in *only*; no-op when *only* is empty."""
    columns = list(columns)
    keep = set(only or ())
    if not keep:
        return columns
    return [c for c in columns if c in keep]


def filter_except(columns: Iterable[str], except_: Optional[Iterable[str]]) -> List[str]:
    """Drop *columns* present in *except_*; no-op when *except_* is empty."""
    columns = list(columns)
    drop = set(except_ or ())
    if not drop:
        return columns
    return [c for c in columns if c not in drop]


def apply_column_filters(columns: Iterable[str], config: ExportConfig) -> List[str]:
    if config.only:
        return filter_only(columns, config.only)
    if config.except_:
        return filter_except(columns, config.except_)
    return list(columns)


def parse_selected_columns(raw: Optional[str], available: Iterable[str]) -> List[str]:
    """Decode the JSON column list sent by the multiselect field."""
    if raw is None:
        raise ColumnSelectionParseError("No columns were selected")
    try:
        selected = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ColumnSelectionParseError(f"Malformed column selection: {exc.msg}") from exc

    if not isinstance(selected, list) or not all(isinstance(c, str) for c in selected):
        raise ColumnSelectionParseError("Column selection must be a list of column names")

    known = set(available)
    unknown = [c for c in selected if c not in known]
    if unknown:
        raise ColumnSelectionParseError(f"Unknown columns: {', '.join(unknown)}")

    # Duplicates would produce repeated spreadsheet columns.
    return list(dict.fromkeys(selected))


def resolve_columns(config: ExportConfig, fields: ExportFields) -> List[str]:
    """Ordered column list for one export run."""
    if config.user_selection:
        columns = parse_selected_columns(fields.columns, config.available_columns)
    else:
        columns = config.available_columns

    columns = apply_column_filters(columns, config)

    if not columns:
        raise EmptyColumnSelectionError("No columns left to export")
    return columns


def pretty_column_name(column: str) -> str:
    """``created_at`` → ``Created At``."""
    return re.sub(r"[-_]", " ", column).title()


def column_options(config: ExportConfig) -> Dict[str, str]:
    """Options for the user-selection multiselect, in schema order."""
    columns = apply_column_filters(config.available_columns, config)
    return {c: pretty_column_name(c) for c in columns}
