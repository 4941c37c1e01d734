"""Invocation field parsing and field descriptors."""

from __future__ import annotations

import json
from datetime import date

import pytest

from resource_export.core.errors import InvalidFieldsError
from resource_export.services.export.fields import (
    ExportFields,
    date_range,
    heading,
    multiselect,
)


class TestExportFields:
    def test_aliases_from_and_to(self) -> None:
        fields = ExportFields.from_bag({"from": "2024-01-01", "to": "2024-01-31"})
        assert fields.date_from == date(2024, 1, 1)
        assert fields.date_to == date(2024, 1, 31)

    def test_empty_bag(self) -> None:
        fields = ExportFields.from_bag(None)
        assert fields.columns is None
        assert fields.date_from is None
        assert fields.date_to is None

    def test_blank_strings_are_absent(self) -> None:
        fields = ExportFields.from_bag({"columns": "", "from": " ", "to": ""})
        assert fields.columns is None
        assert fields.date_from is None
        assert fields.date_to is None

    def test_datetime_strings_truncate_to_date(self) -> None:
        fields = ExportFields.from_bag({"from": "2024-01-01T15:30:00"})
        assert fields.date_from == date(2024, 1, 1)

    def test_list_columns_are_encoded(self) -> None:
        fields = ExportFields.from_bag({"columns": ["id", "email"]})
        assert json.loads(fields.columns) == ["id", "email"]

    def test_unknown_keys_are_ignored(self) -> None:
        fields = ExportFields.from_bag({"resources": "all", "from": "2024-01-01"})
        assert fields.date_from == date(2024, 1, 1)

    def test_instance_passes_through(self) -> None:
        fields = ExportFields(columns='["id"]')
        assert ExportFields.from_bag(fields) is fields

    def test_invalid_date_raises(self) -> None:
        with pytest.raises(InvalidFieldsError, match="from"):
            ExportFields.from_bag({"from": "31/01/2024"})


class TestDescriptors:
    def test_heading_as_html(self) -> None:
        assert heading("Pick <b>dates</b>", as_html=True).to_dict() == {
            "component": "heading",
            "name": "Pick <b>dates</b>",
            "attributes": [],
            "as_html": True,
        }

    def test_required_reorderable_multiselect(self) -> None:
        out = multiselect(
            "Columns", "columns", {"id": "Id"},
            placeholder="Columns to export", required=True, reorderable=True,
        ).to_dict()
        assert out["attributes"] == ["columns"]
        assert out["options"] == [{"value": "id", "label": "Id"}]
        assert out["rules"] == ["required"]
        assert out["reorderable"] is True
        assert out["placeholder"] == "Columns to export"

    def test_date_range_binds_two_attributes(self) -> None:
        out = date_range("Date range", ["from", "to"]).to_dict()
        assert out["component"] == "date-range"
        assert out["attributes"] == ["from", "to"]
