"""GraphStore — the immutable full graph, loaded and validated once.

The dataset is either the JSON file bundled with the package or a file
named in ``[dataset] path``. Integrity problems surface here as a
:class:`DatasetError` rather than later at layout time.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

import networkx as nx
from pydantic import ValidationError

from forcemap.domain.graph import GraphSnapshot

logger = logging.getLogger(__name__)

BUNDLED_DATASET = "lineage.json"


class DatasetError(Exception):
    """Fatal configuration error: the dataset cannot be loaded or is malformed."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"Invalid dataset {location}: {reason}")
        self.location = location
        self.reason = reason


class GraphStore:
    """Owns the full :class:`GraphSnapshot` for the life of the process."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._snapshot: GraphSnapshot | None = None
        self._graph: nx.MultiGraph | None = None

    @property
    def location(self) -> str:
        if self._path is None:
            return f"<bundled:{BUNDLED_DATASET}>"
        return str(self._path)

    def load(self) -> GraphSnapshot:
        """Return the full snapshot, reading and validating it on first call."""
        if self._snapshot is None:
            raw = self._read()
            try:
                self._snapshot = GraphSnapshot.from_dataset(raw)
            except ValidationError as exc:
                reason = "; ".join(err["msg"] for err in exc.errors())
                raise DatasetError(self.location, reason) from exc
            logger.debug(
                "Loaded dataset %s (%d nodes, %d edges)",
                self.location,
                len(self._snapshot.nodes),
                len(self._snapshot.edges),
            )
        return self._snapshot

    @property
    def graph(self) -> nx.MultiGraph:
        """Undirected multigraph view of the full snapshot, built on first access.

        Parallel edges are kept so degrees match the layout's spring counts.
        """
        if self._graph is None:
            snapshot = self.load()
            g: nx.MultiGraph = nx.MultiGraph()
            for node in snapshot.nodes:
                g.add_node(node.id, group=node.group)
            for edge in snapshot.edges:
                g.add_edge(edge.source, edge.target, weight=edge.weight)
            self._graph = g
        return self._graph

    def _read(self) -> dict[str, Any]:
        try:
            if self._path is None:
                text = (
                    resources.files("forcemap")
                    .joinpath("data", BUNDLED_DATASET)
                    .read_text(encoding="utf-8")
                )
            else:
                text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DatasetError(self.location, str(exc)) from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DatasetError(self.location, f"not valid JSON ({exc})") from exc
        if not isinstance(data, dict):
            raise DatasetError(self.location, "top level must be an object")
        return data
