"""
Unit tests for connection exports
"""

import io

import pandas as pd

from export import (
    EXPORT_COLUMNS,
    connections_to_csv,
    connections_to_frame,
    connections_to_records,
)


class TestExport:
    """Test cases for the DataFrame / CSV / record exports"""

    def test_frame_columns_and_rows(self, detector, palette_tables):
        conns = detector.detect_connections(palette_tables)
        df = connections_to_frame(conns)

        assert list(df.columns) == EXPORT_COLUMNS
        assert len(df) == 6
        row = df.iloc[1]
        assert row["source_table"] == "customers"
        assert row["target_field"] == "customer_id"
        assert row["type"] == "primary-foreign"
        assert row["confidence"] == 0.95

    def test_frame_with_table_names(self, detector, palette_tables):
        conns = detector.detect_connections(palette_tables)
        df = connections_to_frame(conns, palette_tables)

        assert list(df.columns) == [
            "source_table", "source_name", "source_field",
            "target_table", "target_name", "target_field",
            "type", "confidence",
        ]
        assert df["source_name"].iloc[0] == "Customers"
        assert df["target_name"].iloc[-1] == "Products"

    def test_empty_frame(self):
        df = connections_to_frame([])
        assert df.empty
        assert list(df.columns) == EXPORT_COLUMNS

    def test_csv(self, detector, palette_tables):
        data = connections_to_csv(detector.detect_connections(palette_tables))

        assert isinstance(data, bytes)
        df = pd.read_csv(io.BytesIO(data))
        assert list(df.columns) == EXPORT_COLUMNS
        assert len(df) == 6

    def test_records_use_wire_keys(self, detector, make_table):
        conns = detector.detect_connections([
            make_table("a", ["id"]),
            make_table("b", ["a_id"]),
        ])
        records = connections_to_records(conns)

        assert records == [{
            "id": conns[0].id,
            "sourceTable": "a",
            "targetTable": "b",
            "sourceField": "id",
            "targetField": "a_id",
            "type": "primary-foreign",
            "confidence": 0.95,
        }]
