"""Row normalization and xlsx serialization."""

from __future__ import annotations

import uuid
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from resource_export.services.export.export import (
    normalize_record,
    normalize_value,
    write_workbook,
)
from tests.helpers import read_sheet


class TestNormalizeValue:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, None),
            ("text", "text"),
            (3, 3),
            (2.5, 2.5),
            (True, True),
            (datetime(2024, 1, 31, 23, 59, 59, 123456), "2024-01-31 23:59:59"),
            (date(2024, 1, 31), "2024-01-31"),
            (time(8, 30), "08:30:00"),
            (Decimal("12.00"), 12),
            (Decimal("12.50"), 12.5),
            (b"raw", "raw"),
            ({"a": 1}, '{"a": 1}'),
            ([1, 2], "[1, 2]"),
        ],
    )
    def test_primitive_forms(self, value, expected) -> None:
        assert normalize_value(value) == expected

    def test_uuid_becomes_string(self) -> None:
        value = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert normalize_value(value) == "12345678-1234-5678-1234-567812345678"

    def test_non_finite_decimal_becomes_float(self) -> None:
        assert normalize_value(Decimal("Infinity")) == float("inf")

    def test_record_keeps_column_order(self) -> None:
        record = normalize_record({"b": date(2024, 1, 1), "a": 1})
        assert list(record) == ["b", "a"]
        assert record == {"b": "2024-01-01", "a": 1}


class TestWriteWorkbook:
    def test_header_from_first_record(self, tmp_path) -> None:
        path = tmp_path / "out.xlsx"
        written = write_workbook(
            [{"id": 1, "name": "Alice"}, {"id": 2, "name": None}], path,
        )
        assert written == 2
        assert read_sheet(path) == [("id", "name"), (1, "Alice"), (2, None)]

    def test_consumes_a_generator_once(self, tmp_path) -> None:
        consumed = []

        def rows():
            for i in range(3):
                consumed.append(i)
                yield {"n": i}

        path = tmp_path / "gen.xlsx"
        assert write_workbook(rows(), path) == 3
        assert consumed == [0, 1, 2]
        assert read_sheet(path)[1:] == [(0,), (1,), (2,)]

    def test_unwritable_path_raises_serialization_error(self, tmp_path) -> None:
        from resource_export.core.errors import SerializationError

        with pytest.raises(SerializationError):
            write_workbook([{"a": 1}], tmp_path / "missing-dir" / "out.xlsx")
