"""Neighborhood filter — 1-hop induced subgraph around a query node.

Scans edges in their original order and keeps every edge touching the
query node. Endpoints of kept edges are collected source-first, deduplicated
by id, in first-encountered order. The input snapshot is never mutated.
"""

from __future__ import annotations

from forcemap.domain.graph import Edge, GraphSnapshot, Node


def neighborhood(snapshot: GraphSnapshot, query_id: str | None) -> GraphSnapshot:
    """Return the 1-hop neighborhood of *query_id* in *snapshot*.

    * ``None`` or ``""`` returns *snapshot* unchanged (reset to full graph).
    * An id that matches no node and no edge yields an empty snapshot.
    * A node with no edges yields a snapshot holding just that node.
    """
    if not query_id:
        return snapshot

    by_id: dict[str, Node] = {n.id: n for n in snapshot.nodes}
    kept_edges: list[Edge] = []
    kept_nodes: dict[str, Node] = {}

    for edge in snapshot.edges:
        if not edge.touches(query_id):
            continue
        kept_edges.append(edge)
        for endpoint in (edge.source, edge.target):
            if endpoint not in kept_nodes:
                kept_nodes[endpoint] = by_id[endpoint]

    if not kept_edges and query_id in by_id:
        kept_nodes[query_id] = by_id[query_id]

    return GraphSnapshot(nodes=tuple(kept_nodes.values()), edges=tuple(kept_edges))
