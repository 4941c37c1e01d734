"""Shared fixtures: a SQLite ``orders`` table and local disks under tmp_path."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
)

from resource_export.core.config import settings
from resource_export.core.storage import DiskManager, LocalDisk
from resource_export.services.export.action import ExportResourceAction
from tests.helpers import ORDER_ROWS


@pytest.fixture
def engine(tmp_path: Path):
    eng = create_engine(f"sqlite:///{tmp_path / 'app.db'}")
    metadata = MetaData()
    orders = Table(
        "orders",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("customer_name", String(100), nullable=False),
        Column("status", String(20), nullable=False),
        Column("amount", Float, nullable=False),
        Column("notes", Text),
        Column("shipped_on", Date),
        Column("created_at", DateTime, nullable=False),
    )
    metadata.create_all(eng)
    with eng.begin() as conn:
        conn.execute(orders.insert(), ORDER_ROWS)
    yield eng
    eng.dispose()


@pytest.fixture
def disks(tmp_path: Path) -> DiskManager:
    return DiskManager({
        "public": LocalDisk("public", tmp_path / "public", "http://testserver/storage"),
        "archive": LocalDisk("archive", tmp_path / "archive", "http://archive.test"),
    })


@pytest.fixture(autouse=True)
def default_export_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "STAGING_DISK", "public")
    monkeypatch.setattr(settings, "EXPORTS_DIR", "exports")
    monkeypatch.setattr(settings, "FILENAME_WITH_TIME", False)
    monkeypatch.setattr(settings, "STREAM_BATCH_SIZE", 2)


@pytest.fixture
def make_action(engine, disks):
    def _make(**kwargs: Any) -> ExportResourceAction:
        return ExportResourceAction("Order", "orders", engine=engine, disks=disks, **kwargs)
    return _make
