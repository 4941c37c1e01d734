"""HTTP surface: export listing, field descriptors, runs and downloads."""

from __future__ import annotations

from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from resource_export.api.v1.exports import get_registry
from resource_export.core.storage import XLSX_MEDIA_TYPE
from resource_export.main import create_fastapi_app
from resource_export.services.export.registry import ExportRegistry


@pytest.fixture
def registry(make_action) -> ExportRegistry:
    registry = ExportRegistry()
    registry.register("orders", make_action().with_user_selection().uses_date_range())
    return registry


@pytest.fixture
def client(registry, disks, monkeypatch) -> TestClient:
    monkeypatch.setattr("resource_export.api.storage.storage", disks)
    monkeypatch.setattr("resource_export.api.v1.system.storage", disks)
    app = create_fastapi_app()
    app.dependency_overrides[get_registry] = lambda: registry
    return TestClient(app)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestDiscovery:
    def test_root(self, client) -> None:
        assert client.get("/").json()["status"] == "running"

    def test_health(self, client) -> None:
        body = client.get("/api/v1/system/health").json()
        assert body["status"] == "ok"
        assert body["disks"] == ["archive", "public"]

    def test_list_exports(self, client) -> None:
        response = client.get("/api/v1/exports")
        assert response.status_code == 200
        assert response.json() == [{"resource": "orders", "name": "Export Orders"}]

    def test_fields(self, client) -> None:
        body = client.get("/api/v1/exports/orders/fields").json()
        assert body["name"] == "Export Orders"
        assert body["confirm_text"] == "Are you sure you want to perform export action ?"
        assert [f["component"] for f in body["fields"]] == [
            "heading", "multiselect", "heading", "date-range",
        ]

    def test_unknown_resource(self, client) -> None:
        assert client.get("/api/v1/exports/invoices/fields").status_code == 404
        assert client.post("/api/v1/exports/invoices", json={}).status_code == 404


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------


class TestRun:
    def test_run_then_download(self, client) -> None:
        response = client.post(
            "/api/v1/exports/orders",
            json={"columns": ["id", "status"], "from": "2024-01-01", "to": "2024-01-31"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["download"].startswith("http://testserver/storage/exports/Orders_")

        download = client.get(body["download"])
        assert download.status_code == 200
        assert download.headers["content-type"] == XLSX_MEDIA_TYPE

        sheet = load_workbook(BytesIO(download.content)).active
        rows = list(sheet.iter_rows(values_only=True))
        assert rows == [("id", "status"), (3, "paid"), (2, "pending"), (1, "paid")]

    def test_empty_result_is_danger(self, client) -> None:
        response = client.post(
            "/api/v1/exports/orders",
            json={"columns": '["id"]', "from": "2030-01-01"},
        )
        assert response.status_code == 200
        assert response.json() == {
            "danger": "An error occurred while exporting data. No records matching selection",
        }


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


class TestStorage:
    def test_missing_file(self, client) -> None:
        assert client.get("/storage/exports/nope.xlsx").status_code == 404

    def test_escaping_path(self, client) -> None:
        assert client.get("/storage/..%2F..%2Fapp.db").status_code == 404
