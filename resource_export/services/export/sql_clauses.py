"""
SQL clause builders — Pure functions for the date-range filter.

Single Responsibility: turn ``from`` / ``to`` dates into WHERE and
ORDER BY clauses on a temporal column.  No query orchestration, no I/O.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

from sqlalchemy import ColumnElement, Select

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────
#  DAY BOUNDS
# ─────────────────────────────────────────────────────────────────

def start_of_day(value: date) -> datetime:
    """``2024-01-31`` → ``2024-01-31 00:00:00``."""
    return datetime.combine(value, time.min)


def end_of_day(value: date) -> datetime:
    """``2024-01-31`` → ``2024-01-31 23:59:59.999999``."""
    return datetime.combine(value, time.max)


def day_bounds(value: date) -> Tuple[datetime, datetime]:
    """Half-open ``[start, next_start)`` covering one calendar day."""
    start = start_of_day(value)
    return start, start + timedelta(days=1)


# ─────────────────────────────────────────────────────────────────
#  DATERANGE
# ─────────────────────────────────────────────────────────────────

def apply_date_range(
    query: Select,
    column: ColumnElement,
    date_from: Optional[date],
    date_to: Optional[date],
) -> Select:
    """
    Filter *query* on *column* and order it ascending by *column*.

    - ``from`` and ``to``: inclusive ``BETWEEN start_of_day(from) AND
      end_of_day(to)``.
    - only ``from``: rows on that calendar day.
    - only ``to``: no filter.  Kept as a pass-through; the export then
      contains every row, ordered.

    Ordering is applied in every case.
    """
    if date_from and date_to:
        query = query.where(
            column.between(start_of_day(date_from), end_of_day(date_to))
        )
    elif date_from:
        start, next_start = day_bounds(date_from)
        query = query.where(column >= start, column < next_start)
    elif date_to:
        logger.debug(
            f"[sql_clauses] only 'to'={date_to} given for {column}; no date filter applied"
        )

    return query.order_by(column.asc())
