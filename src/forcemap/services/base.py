"""BaseService — shared foundation for forcemap services.

Every service receives the :class:`GraphStore` holding the full dataset
and the frozen settings. Services never mutate the store; filtered views
are new snapshots built per call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from forcemap.domain.neighborhood import neighborhood
from forcemap.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from forcemap.config.settings import ForcemapSettings
    from forcemap.domain.graph import GraphSnapshot
    from forcemap.infrastructure.store import DatasetError, GraphStore

logger = logging.getLogger(__name__)


class BaseService:
    def __init__(self, store: GraphStore, settings: ForcemapSettings) -> None:
        self._store = store
        self._settings = settings

    def _snapshot(self, center: str | None = None) -> GraphSnapshot:
        """Full snapshot, or the 1-hop neighborhood of *center* when given.

        Raises:
            DatasetError: The dataset failed validation.
        """
        return neighborhood(self._store.load(), center)

    @staticmethod
    def _dataset_error(op: str, exc: DatasetError) -> ServiceResult:
        logger.error("Dataset rejected: %s", exc)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="INVALID_DATASET",
                message=str(exc),
                detail={"location": exc.location, "reason": exc.reason},
            ),
        )

    @staticmethod
    def _no_match_warning(center: str | None, snapshot: GraphSnapshot) -> list[str]:
        if center and snapshot.is_empty:
            return [f"No node or edge matches '{center}'"]
        return []
