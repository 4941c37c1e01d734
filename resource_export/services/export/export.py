"""
Export — row normalization and xlsx serialization.

Single Responsibility: convert row records to primitive values and
write them to a workbook.  No business logic, no DB access.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from resource_export.core.errors import SerializationError

logger = logging.getLogger(__name__)

XLSX_EXTENSION = ".xlsx"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


# ─────────────────────────────────────────────────────────────────
#  NORMALIZATION
# ─────────────────────────────────────────────────────────────────

def normalize_value(value: Any) -> Any:
    """Reduce a DB value to str / int / float / bool / None."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, datetime):
        return value.strftime(DATETIME_FORMAT)
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        return float(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, default=str)
    return str(value)


def normalize_record(row: Mapping[str, Any]) -> Dict[str, Any]:
    """One DB row → ``{column: primitive}`` preserving column order."""
    return {key: normalize_value(value) for key, value in row.items()}


# ─────────────────────────────────────────────────────────────────
#  XLSX
# ─────────────────────────────────────────────────────────────────

def write_workbook(
    records: Iterable[Mapping[str, Any]],
    path: str | Path,
    sheet_name: str = "Sheet1",
) -> int:
    """
    Write *records* to an xlsx file at *path* and return the row count.

    The header row is taken from the keys of the first record.  Records
    are consumed once, in order, so a generator is never materialized.
    """
    workbook = Workbook(write_only=True)
    sheet = workbook.create_sheet(sheet_name)

    header = None
    written = 0
    try:
        for record in records:
            if header is None:
                header = list(record.keys())
                sheet.append(header)
            sheet.append([record.get(column) for column in header])
            written += 1
        workbook.save(str(path))
    except (OSError, IllegalCharacterError) as exc:
        raise SerializationError(f"Unable to write {path}: {exc}") from exc

    logger.debug(f"[export] wrote {written} rows to {path}")
    return written
