"""
detector.py — Tablelinks
Naming-heuristic join inference between canvas tables.

The ConnectionDetector compares every column of every table against
every column of each later table and scores the pair with three
checks, first hit wins:

1. exact    — case-insensitive identical names            → 1.0
2. id_base  — both ID fields sharing the same ID base      → 0.95
3. fuzzy    — normalized Levenshtein similarity above 0.8  → similarity × 0.9

Pairs scoring above MIN_CONFIDENCE become Connections. No database is
consulted; column names are the only input.

Copyright 2026 Common Gene Labs. All rights reserved.
Original concept by Dr. Amelia Miramonti, PhD.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Mapping
from typing import Any, Iterable, Sequence

from models import Connection, ConnectionType, FieldMatch, TableNode

logger = logging.getLogger(__name__)


# ─── Constants ───────────────────────────────────────────────────────────────

MIN_CONFIDENCE        = 0.7     # exclusive
EXACT_CONFIDENCE      = 1.0
ID_MATCH_CONFIDENCE   = 0.95
FUZZY_SIMILARITY_MIN  = 0.8     # exclusive
FUZZY_WEIGHT          = 0.9

_ID_SUFFIX = re.compile(r"_?id$")
_ID_PREFIX = re.compile(r"^id_?")


# ─── Name helpers (module-level, reusable outside the engine) ────────────────

def levenshtein_distance(a: str, b: str) -> int:
    """Classic DP edit distance over a (len(a)+1) x (len(b)+1) matrix."""
    matrix = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]
    for i in range(len(a) + 1):
        matrix[i][0] = i
    for j in range(len(b) + 1):
        matrix[0][j] = j

    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            if a[i - 1] == b[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = 1 + min(
                    matrix[i - 1][j - 1],
                    matrix[i][j - 1],
                    matrix[i - 1][j],
                )
    return matrix[len(a)][len(b)]


def string_similarity(a: str, b: str) -> float:
    """1 - normalized edit distance; two empty strings are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(a, b)) / longest


def is_id_field(name: str) -> bool:
    return "id" in name.lower()


def id_base(name: str) -> str:
    """'customer_id' → 'customer', 'id_customer' → 'customer', 'id' → ''"""
    return _ID_PREFIX.sub("", _ID_SUFFIX.sub("", name.lower()))


def _is_bare_key_pair(f1: str, f2: str) -> bool:
    """'id' against 'customer_id': a bare primary key and any foreign key"""
    return (f1 == "id" and f2.endswith("_id")) or (f2 == "id" and f1.endswith("_id"))


def classify_connection(field1: str, field2: str) -> ConnectionType:
    """
    Classify a pair of names by their key suffixes.

    Only the exact-match path calls this today, where both names are
    equal, so the first branch never fires there.
    """
    f1 = field1.lower()
    f2 = field2.lower()

    if _is_bare_key_pair(f1, f2):
        return "primary-foreign"
    if f1.endswith("_id") and f2.endswith("_id"):
        return "foreign-foreign"
    return "inferred"


def match_fields(field1: str, field2: str) -> FieldMatch:
    """Score how likely two column names refer to the same key."""
    f1 = field1.lower()
    f2 = field2.lower()

    if f1 == f2:
        return FieldMatch(EXACT_CONFIDENCE, classify_connection(f1, f2))

    if is_id_field(f1) and is_id_field(f2):
        if id_base(f1) == id_base(f2) or _is_bare_key_pair(f1, f2):
            return FieldMatch(ID_MATCH_CONFIDENCE, "primary-foreign")

    similarity = string_similarity(f1, f2)
    if similarity > FUZZY_SIMILARITY_MIN:
        return FieldMatch(similarity * FUZZY_WEIGHT, "inferred")

    return FieldMatch(0.0, "inferred")


def _as_table_node(table: Any) -> Any:
    """Mappings go through TableNode validation; nodes and other objects pass as-is."""
    if not isinstance(table, Mapping):
        return table
    data = dict(table)
    tid  = data.get("id", data.get("name"))
    data["id"]   = "" if tid is None else str(tid)
    data["name"] = str(data.get("name") or data["id"])
    return TableNode.model_validate(data)


# ─── Main engine class ────────────────────────────────────────────────────────

class ConnectionDetector:
    """
    Infers join relationships across a snapshot of canvas tables.

    Usage
    -----
        detector = ConnectionDetector()
        conns = detector.detect_connections(tables)

    The detector is stateless — every call is a full recomputation and
    only the generated connection ids differ between identical calls.
    """

    def detect_connections(self, tables: Sequence[Any]) -> list[Connection]:
        """
        Run field matching across every pair of distinct tables.

        Parameters
        ----------
        tables : sequence of TableNode (mappings are validated into TableNodes first)

        Returns
        -------
        Connections in discovery order: table i, then table j > i, then
        columns of i × columns of j in list order.
        """
        tables = [_as_table_node(t) for t in tables]
        connections: list[Connection] = []

        for i, table1 in enumerate(tables):
            for table2 in tables[i + 1:]:
                matches = self.find_matching_fields(
                    table1.columns or [],
                    table2.columns or [],
                )
                for col1, col2, match in matches:
                    connections.append(Connection(
                        id           = uuid.uuid4().hex,
                        source_table = table1.id,
                        target_table = table2.id,
                        source_field = col1,
                        target_field = col2,
                        type         = match.type,
                        confidence   = match.confidence,
                    ))

        logger.debug(
            "Detected %d connection(s) across %d table(s)",
            len(connections), len(tables),
        )
        return connections

    @staticmethod
    def find_matching_fields(
        columns1: Iterable[str],
        columns2: Iterable[str],
    ) -> list[tuple[str, str, FieldMatch]]:
        """Every column pair whose score clears MIN_CONFIDENCE."""
        columns2 = list(columns2)
        matches: list[tuple[str, str, FieldMatch]] = []
        for col1 in columns1:
            for col2 in columns2:
                match = match_fields(col1, col2)
                if match.confidence > MIN_CONFIDENCE:
                    matches.append((col1, col2, match))
        return matches


_detector = ConnectionDetector()


def detect_connections(tables: Sequence[Any]) -> list[Connection]:
    return _detector.detect_connections(tables)
