"""
models.py — Tablelinks
Data shapes exchanged between the canvas UI and the connection detector.

TableNode   — a table/collection dropped on the canvas
Connection  — an inferred join between two TableNodes

Copyright 2026 Common Gene Labs. All rights reserved.
Original concept by Dr. Amelia Miramonti, PhD.
"""

from __future__ import annotations

from typing import Any, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


ConnectionType = Literal["primary-foreign", "foreign-foreign", "inferred"]


class TableNode(BaseModel):
    """A table or collection with its ordered column names."""

    id: str
    name: str
    type: str = "table"
    columns: list[str] = Field(default_factory=list)

    # Canvas position, not used for matching
    x: float = 0
    y: float = 0

    # Additional metadata from the catalog backend
    source_file: str | None = None
    record_count: int | None = None
    description: str | None = None
    sample_data: dict[str, Any] | None = None

    @field_validator("columns", mode="before")
    @classmethod
    def _normalize_columns(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValueError("columns must be a list of names")
        cols: list[str] = []
        for col in value:
            if isinstance(col, dict):
                col = col.get("name")
            if col is None:
                continue
            cols.append(col if isinstance(col, str) else str(col))
        return cols


class Connection(BaseModel):
    """
    An inferred relationship between two tables.

    ``source_table`` is always the table that appeared earlier in the
    detector input. Dumps with ``by_alias=True`` use the camelCase keys
    the canvas UI expects.
    """

    model_config = ConfigDict(populate_by_name=True)

    id:           str
    source_table: str = Field(alias="sourceTable")
    target_table: str = Field(alias="targetTable")
    source_field: str = Field(alias="sourceField")
    target_field: str = Field(alias="targetField")
    type:         ConnectionType
    confidence:   float = Field(gt=0.0, le=1.0)


class FieldMatch(NamedTuple):
    confidence: float
    type: ConnectionType
