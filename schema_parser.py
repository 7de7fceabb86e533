"""
schema_parser.py — Tablelinks
Parses JSON and YAML table catalogs into TableNode lists for the
connection detector.

Expected JSON format
--------------------
{
  "tables": [
    {
      "id": "orders",
      "name": "Orders",
      "type": "PostgreSQL",
      "columns": ["id", "customer_id", "amount"],
      "record_count": 1200
    }
  ]
}

A bare list of table entries is accepted too. Column entries may be
plain names or {"name": ...} objects, and the canvas palette's
"fields" key stands in for "columns". YAML input is converted to the
same structure before parsing.

Copyright 2026 Common Gene Labs. All rights reserved.
Original concept by Dr. Amelia Miramonti, PhD.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import yaml
from pydantic import ValidationError

from models import TableNode

logger = logging.getLogger(__name__)


class SchemaParseError(ValueError):
    """Raised when a catalog cannot be turned into TableNodes."""


class SchemaParser:
    """
    Parses structured table catalogs (JSON or YAML) into the TableNode
    representation consumed by ConnectionDetector.

    Returns
    -------
    tables : list[TableNode]
        In catalog order, which is also the detector's pair order.
    """

    def parse(self, raw: str, fmt: str = "json") -> list[TableNode]:
        """
        Parse a catalog string.

        Parameters
        ----------
        raw : str   — raw file content
        fmt : str   — "json" or "yaml"
        """
        if fmt == "json":
            return self.parse_json(raw)
        if fmt in ("yaml", "yml"):
            return self.parse_yaml(raw)
        raise SchemaParseError(f"Unknown catalog format: {fmt!r}. Valid options: ['json', 'yaml']")

    def parse_json(self, raw: str) -> list[TableNode]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SchemaParseError(f"Invalid JSON catalog: {e}") from e
        return self.parse_data(data)

    def parse_yaml(self, raw: str) -> list[TableNode]:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise SchemaParseError(f"Invalid YAML catalog: {e}") from e
        return self.parse_data(data)

    def parse_data(self, data: Any) -> list[TableNode]:
        """Build TableNodes from an already-decoded catalog object."""
        entries = self._table_entries(data)
        tables: list[TableNode] = []
        seen:   set[str]        = set()

        for idx, entry in enumerate(entries):
            node = self._parse_entry(idx, entry)
            if node.id in seen:
                raise SchemaParseError(f"Table #{idx}: duplicate table id {node.id!r}")
            seen.add(node.id)

            if len(set(node.columns)) != len(node.columns):
                logger.warning("Table %r lists duplicate column names", node.id)
            tables.append(node)

        logger.debug("Parsed %d table(s) from catalog", len(tables))
        return tables

    # ── Internal ──────────────────────────────────────────────────────────

    @staticmethod
    def _table_entries(data: Any) -> list:
        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("tables", [])
        if not isinstance(data, list):
            raise SchemaParseError(
                "Catalog must be a list of tables or an object with a 'tables' list"
            )
        return data

    @staticmethod
    def _parse_entry(idx: int, entry: Any) -> TableNode:
        if not isinstance(entry, dict):
            raise SchemaParseError(f"Table #{idx}: expected an object, got {type(entry).__name__}")

        tid   = entry.get("id", entry.get("name"))
        tname = entry.get("name", tid)
        if tid is None:
            raise SchemaParseError(f"Table #{idx}: missing both 'id' and 'name'")

        fields = dict(entry)
        fields["id"]      = str(tid)
        fields["name"]    = str(tname)
        fields["columns"] = entry.get("columns", entry.get("fields"))
        fields.pop("fields", None)

        try:
            return TableNode.model_validate(fields)
        except ValidationError as e:
            raise SchemaParseError(f"Table #{idx} ({fields['id']!r}): {e}") from e
