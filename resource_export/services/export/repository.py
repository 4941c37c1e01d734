"""
ExportRepository — Executes export queries.

Two retrieval modes:
  fetch_all : every row in one list (small and medium tables).
  stream    : generator over a server-side cursor, ``batch_size`` rows
              buffered at a time.  Single pass, not restartable; the
              connection stays open until the generator is exhausted or
              closed.

Both modes yield normalized records, so the serializer sees identical
input for identical rows.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from sqlalchemy import Select
from sqlalchemy.engine import Engine

from resource_export.core.config import settings
from resource_export.core.database import db_manager
from resource_export.services.export.export import normalize_record
from resource_export.services.export.query_builder import ExportQueryBuilder

logger = logging.getLogger(__name__)


class ExportRepository:
    """Runs queries built by :class:`ExportQueryBuilder` on one engine."""

    def __init__(self, engine: Engine, batch_size: Optional[int] = None) -> None:
        self.engine = engine
        self.batch_size = batch_size or settings.STREAM_BATCH_SIZE

    # ─────────────────────────────────────────────────────────────
    #  COUNT
    # ─────────────────────────────────────────────────────────────

    def count(self, query: Select) -> int:
        with db_manager.connect(self.engine) as conn:
            total = conn.execute(ExportQueryBuilder.count_query(query)).scalar_one()
        logger.debug(f"[ExportRepo] count={total}")
        return int(total)

    # ─────────────────────────────────────────────────────────────
    #  FETCH
    # ─────────────────────────────────────────────────────────────

    def fetch_all(self, query: Select) -> List[Dict]:
        with db_manager.connect(self.engine) as conn:
            rows =conn.execute(query).mappings().all()
        logger.info(f"[ExportRepo] fetched {len(rows)} rows")
        return [normalize_record(row) for row in rows]

    def stream(self, query: Select) -> Iterator[Dict]:
        streamed = 0
        with db_manager.connect(self.engine) as conn:
            result =conn.execution_options(yield_per=self.batch_size).execute(query)
            for row in result.mappings():
                streamed += 1
                yield normalize_record(row)
        logger.info(
            f"[ExportRepo] streamed {streamed} rows (batch={self.batch_size})"
        )
