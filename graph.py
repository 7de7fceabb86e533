"""
graph.py — Tablelinks
networkx view over one detection run, used for the entity graph and
for grouping tables that are joined together.

Copyright 2026 Common Gene Labs. All rights reserved.
Original concept by Dr. Amelia Miramonti, PhD.
"""

from __future__ import annotations

from typing import Iterable

import networkx as nx

from models import Connection, TableNode


def build_relationship_graph(
    tables: Iterable[TableNode],
    connections: Iterable[Connection],
) -> nx.MultiGraph:
    """
    One node per table, one edge per connection.

    Parallel edges are kept, keyed by connection id, since a table pair
    can be joined through several column pairs.
    """
    g = nx.MultiGraph()
    for t in tables:
        g.add_node(t.id, name=t.name, type=t.type, columns=list(t.columns))

    for c in connections:
        g.add_edge(
            c.source_table, c.target_table, key=c.id,
            source_field = c.source_field,
            target_field = c.target_field,
            type         = c.type,
            confidence   = c.confidence,
        )
    return g


def related_groups(g: nx.Graph) -> list[list[str]]:
    """Connected table ids, largest group first, singletons included."""
    groups = [sorted(comp) for comp in nx.connected_components(g)]
    groups.sort(key=lambda grp: (-len(grp), grp))
    return groups


def strongest_links(connections: Iterable[Connection]) -> dict[tuple[str, str], Connection]:
    """Highest-confidence connection per (source, target) pair; first one wins ties."""
    best: dict[tuple[str, str], Connection] = {}
    for c in connections:
        pair = (c.source_table, c.target_table)
        if pair not in best or c.confidence > best[pair].confidence:
            best[pair] = c
    return best
