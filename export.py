"""
export.py — Tablelinks
Tabular and wire-format exports of detected connections.

Copyright 2026 Common Gene Labs. All rights reserved.
Original concept by Dr. Amelia Miramonti, PhD.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from models import Connection, TableNode


EXPORT_COLUMNS: list[str] = [
    "source_table",
    "source_field",
    "target_table",
    "target_field",
    "type",
    "confidence",
]


def connections_to_frame(
    connections: Iterable[Connection],
    tables: Iterable[TableNode] | None = None,
) -> pd.DataFrame:
    """
    Flatten connections into a DataFrame, one row per connection.

    When ``tables`` is given, display names are added as
    ``source_name`` / ``target_name``; ids missing from it map to "".
    """
    columns = list(EXPORT_COLUMNS)
    rows = [c.model_dump(include=set(EXPORT_COLUMNS)) for c in connections]
    df = pd.DataFrame(rows, columns=columns)

    if tables is not None:
        names = {t.id: t.name for t in tables}
        df.insert(1, "source_name", [names.get(t, "") for t in df["source_table"]])
        df.insert(4, "target_name", [names.get(t, "") for t in df["target_table"]])
    return df


def connections_to_csv(
    connections: Iterable[Connection],
    tables: Iterable[TableNode] | None = None,
) -> bytes:
    return connections_to_frame(connections, tables).to_csv(index=False).encode()


def connections_to_records(connections: Iterable[Connection]) -> list[dict]:
    """camelCase records in the shape the canvas UI draws edges from."""
    return [c.model_dump(by_alias=True) for c in connections]
