"""
DatabaseManager — Lazy engine management and schema reflection.

Key design decisions:
- NullPool everywhere: every export opens and closes its own connection,
  so a long streaming export never pins a pooled connection.
- Lazy engines: created on first use, not at import time, one per URL.
- Reflection: exported tables are reflected, never declared; the
  application consumes the schema it is given.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from sqlalchemy import MetaData, Table, create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import NullPool

from resource_export.core.config import settings


def _engine_kwargs(url: str) -> dict:
    """Common engine kwargs; MySQL connections are forced to utf8mb4."""
    kwargs: dict = {"poolclass": NullPool}
    if url.startswith("mysql"):
        kwargs["connect_args"] = {"charset": "utf8mb4"}
    return kwargs


class DatabaseManager:
    """
    Centralised engine manager.

    Responsibilities:
    - Default engine for ``EXPORT_DB_URL``.
    - Additional engines resolved at runtime by URL.
    - Context-managed connections.
    - Table reflection for export actions.
    """

    def __init__(self) -> None:
        self._engines: Dict[str, Engine] = {}

    # ─────────────────────────────────────────────────────────────
    #  ENGINES
    # ─────────────────────────────────────────────────────────────

    @property
    def engine(self) -> Engine:
        """Engine for the configured export database."""
        return self.engine_for(settings.EXPORT_DB_URL)

    def engine_for(self, url: str) -> Engine:
        """Get (or lazily create) an engine for *url*."""
        if url not in self._engines:
            self._engines[url] = create_engine(
                url, echo=settings.DEBUG, **_engine_kwargs(url),
            )
        return self._engines[url]

    # ─────────────────────────────────────────────────────────────
    #  CONNECTIONS / REFLECTION
    # ─────────────────────────────────────────────────────────────

    @contextmanager
    def connect(self, engine: Optional[Engine] = None) -> Iterator[Connection]:
        """Read-only connection; exports never write to the database."""
        with (engine or self.engine).connect() as conn:
            yield conn

    def reflect_table(self, table_name: str, engine: Optional[Engine] = None) -> Table:
        """Reflect *table_name* into a fresh ``MetaData``."""
        return Table(table_name, MetaData(), autoload_with=engine or self.engine)

    # ─────────────────────────────────────────────────────────────
    #  CLEANUP
    # ─────────────────────────────────────────────────────────────

    def close(self) -> None:
        """Dispose of every engine on shutdown."""
        for engine in self._engines.values():
            engine.dispose()
        self._engines.clear()


# ── Global singleton ─────────────────────────────────────────────
db_manager = DatabaseManager()
