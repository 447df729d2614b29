"""GraphService — neighborhood queries, group listings, and graph summary.

``neighborhood`` and ``groups`` work on snapshots (full or filtered);
``summary`` reads the store's NetworkX view of the full graph.
"""

from __future__ import annotations

from typing import Any

import networkx as nx

from forcemap.infrastructure.store import DatasetError
from forcemap.services.base import BaseService
from forcemap.services.result import ServiceResult


class GraphService(BaseService):
    """Read-only queries over the dataset."""

    def neighborhood(self, center: str | None) -> ServiceResult:
        """Nodes and edges of the 1-hop neighborhood around *center*.

        An empty *center* returns the full graph.
        """
        try:
            snapshot = self._snapshot(center)
        except DatasetError as exc:
            return self._dataset_error("neighborhood", exc)

        labels = self._settings.groups
        return ServiceResult(
            ok=True,
            op="neighborhood",
            data={
                "center": center or None,
                "node_count": len(snapshot.nodes),
                "edge_count": len(snapshot.edges),
                "nodes": [
                    {"id": n.id, "group": n.group, "label": labels.label_for(n.group)}
                    for n in snapshot.nodes
                ],
                "edges": [
                    {"source": e.source, "target": e.target, "weight": e.weight}
                    for e in snapshot.edges
                ],
            },
            warnings=self._no_match_warning(center, snapshot),
        )

    def groups(self, center: str | None = None) -> ServiceResult:
        """Node ids per display group, in snapshot order.

        Groups come from each node's explicit ``group`` field; labels come
        from the ``[groups]`` config section.
        """
        try:
            snapshot = self._snapshot(center)
        except DatasetError as exc:
            return self._dataset_error("groups", exc)

        members: dict[int, list[str]] = {}
        for node in snapshot.nodes:
            members.setdefault(node.group, []).append(node.id)

        labels = self._settings.groups
        group_list = [
            {
                "group": group,
                "label": labels.label_for(group),
                "count": len(ids),
                "members": ids,
            }
            for group, ids in sorted(members.items())
        ]
        return ServiceResult(
            ok=True,
            op="groups",
            data={"center": center or None, "count": len(group_list), "groups": group_list},
            warnings=self._no_match_warning(center, snapshot),
        )

    def summary(self, *, top: int = 10) -> ServiceResult:
        """Counts, connectivity, and the highest-degree nodes of the full graph."""
        try:
            g = self._store.graph
        except DatasetError as exc:
            return self._dataset_error("summary", exc)

        if g.number_of_nodes() == 0:
            return ServiceResult(
                ok=True,
                op="summary",
                data={
                    "nodes": 0,
                    "edges": 0,
                    "distinct_edges": 0,
                    "components": 0,
                    "isolated": 0,
                    "count": 0,
                    "items": [],
                },
            )

        ranked = sorted(g.degree(), key=lambda item: (-item[1], item[0]))[:top]
        items: list[dict[str, Any]] = [
            {"id": node_id, "group": g.nodes[node_id].get("group", 0), "degree": degree}
            for node_id, degree in ranked
        ]
        return ServiceResult(
            ok=True,
            op="summary",
            data={
                "nodes": g.number_of_nodes(),
                "edges": g.number_of_edges(),
                "distinct_edges": nx.Graph(g).number_of_edges(),
                "components": nx.number_connected_components(g),
                "isolated": nx.number_of_isolates(g),
                "count": len(items),
                "items": items,
            },
        )
