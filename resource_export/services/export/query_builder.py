"""
ExportQueryBuilder — SQLAlchemy Core queries for one exported table.

Single Responsibility: compose the SELECT for an export run and its
pre-flight COUNT.  Date clauses live in ``sql_clauses``; execution lives
in ``repository``.

Usage::

    builder = ExportQueryBuilder(config)
    query = builder.build(["id", "email"], fields)
    total_query = builder.count_query(query)
"""

from __future__ import annotations

from typing import List

from sqlalchemy import Select, func, select

from resource_export.services.export.base import ExportConfig
from resource_export.services.export.fields import ExportFields
from resource_export.services.export.sql_clauses import apply_date_range


class ExportQueryBuilder:
    """
    Builds export queries from an ``ExportConfig``.

    Stateless across runs: every call starts from a fresh base query, so
    one invocation never sees another invocation's filters.
    """

    def __init__(self, config: ExportConfig) -> None:
        self.config = config

    @property
    def table(self):
        return self.config.table

    def base_query(self) -> Select:
        """``SELECT * FROM table``, the input handed to custom queries."""
        return select(self.table)

    def select_columns(self, columns: List[str]) -> Select:
        """``SELECT table.a, table.b ...``, table-qualified for joins."""
        return select(*[self.table.c[name] for name in columns])

    def build(self, columns: List[str], fields: ExportFields) -> Select:
        """
        Full export query for one run.

        A custom query replaces column selection entirely; the date-range
        filter and ordering are still applied on top of it.
        """
        if self.config.custom_query is not None:
            query = self.config.custom_query(self.base_query())
        else:
            query = self.select_columns(columns)

        if self.config.date_range:
            query = apply_date_range(
                query,
                self.table.c[self.config.range_column],
                fields.date_from,
                fields.date_to,
            )
        return query

    @staticmethod
    def count_query(query: Select) -> Select:
        """``SELECT count(*) FROM (query)`` with the ordering dropped."""
        return select(func.count()).select_from(query.order_by(None).subquery())
