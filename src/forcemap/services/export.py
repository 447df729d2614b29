"""ExportService — write a settled layout as D3-style JSON or a static SVG.

The SVG mirrors what an interactive renderer would draw on the last frame:
a viewBox centred on the origin, one line per edge with width
``sqrt(weight)``, one circle per node filled by group colour, and a
``<title>`` tooltip of id and group.
"""

from __future__ import annotations

import json
from enum import StrEnum
from html import escape
from pathlib import Path
from typing import TYPE_CHECKING, Any

from forcemap.infrastructure.store import DatasetError
from forcemap.services.base import BaseService
from forcemap.services.layout import LayoutService
from forcemap.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from forcemap.config.models import RenderConfig
    from forcemap.domain.graph import GraphSnapshot
    from forcemap.infrastructure.layout import LayoutFrame


class ExportFormat(StrEnum):
    JSON = "json"
    SVG = "svg"


class ExportService(BaseService):
    """Serializes settled layouts."""

    def export_layout(
        self,
        fmt: ExportFormat | str,
        center: str | None = None,
        *,
        seed: int | None = None,
        output: Path | None = None,
    ) -> ServiceResult:
        """Render the layout in *fmt*; write it to *output* or return it inline."""
        try:
            fmt = ExportFormat(fmt)
        except ValueError:
            return ServiceResult(
                ok=False,
                op="export",
                error=ServiceError(
                    code="INVALID_FORMAT",
                    message=f"Unknown export format '{fmt}'",
                    detail={"choices": [f.value for f in ExportFormat]},
                ),
            )

        try:
            snapshot, frame, warnings = LayoutService(self._store, self._settings).settle(
                center, seed=seed
            )
        except DatasetError as exc:
            return self._dataset_error("export", exc)

        if fmt is ExportFormat.JSON:
            content = self._to_d3_json(snapshot, frame)
        else:
            content = self._to_svg(snapshot, frame, self._settings.render)

        data: dict[str, Any] = {
            "format": fmt.value,
            "center": center or None,
            "nodes": len(snapshot.nodes),
            "edges": len(snapshot.edges),
        }
        if output is None:
            data["content"] = content
        else:
            try:
                output.parent.mkdir(parents=True, exist_ok=True)
                output.write_text(content, encoding="utf-8")
            except OSError as exc:
                return ServiceResult(
                    ok=False,
                    op="export",
                    error=ServiceError(
                        code="WRITE_FAILED",
                        message=f"Cannot write {output}: {exc}",
                        detail={"path": str(output)},
                    ),
                )
            data["path"] = str(output)

        return ServiceResult(ok=True, op="export", data=data, warnings=warnings)

    @staticmethod
    def _to_d3_json(snapshot: GraphSnapshot, frame: LayoutFrame) -> str:
        """Dataset shape plus settled ``x``/``y`` on each node."""
        coords = {p.id: p for p in frame.positions}
        doc = snapshot.to_dataset()
        for node in doc["nodes"]:
            node["x"] = round(coords[node["id"]].x, 3)
            node["y"] = round(coords[node["id"]].y, 3)
        return json.dumps(doc, indent=2) + "\n"

    @staticmethod
    def _to_svg(snapshot: GraphSnapshot, frame: LayoutFrame, render: RenderConfig) -> str:
        # Ordinal colour scale over the sorted distinct groups.
        domain = sorted({n.group for n in snapshot.nodes})
        colour = {g: render.palette[i % len(render.palette)] for i, g in enumerate(domain)}
        groups = {n.id: n.group for n in snapshot.nodes}
        w, h = render.width, render.height

        lines = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" '
            f'viewBox="{-w / 2} {-h / 2} {w} {h}" '
            'style="max-width: 100%; height: auto; height: intrinsic;">',
            f'  <g stroke="{render.link_stroke}" stroke-opacity="{render.link_stroke_opacity}" '
            'stroke-linecap="round">',
        ]
        for s in frame.segments:
            lines.append(
                f'    <line x1="{s.x1:.2f}" y1="{s.y1:.2f}" x2="{s.x2:.2f}" y2="{s.y2:.2f}" '
                f'stroke-width="{s.width:.3g}"/>'
            )
        lines.append("  </g>")
        lines.append(
            f'  <g stroke="{render.node_stroke}" stroke-width="{render.node_stroke_width}">'
        )
        for p in frame.positions:
            group = groups[p.id]
            lines.append(
                f'    <circle cx="{p.x:.2f}" cy="{p.y:.2f}" r="{render.node_radius}" '
                f'fill="{colour[group]}"><title>{escape(p.id)}\n{group}</title></circle>'
            )
        lines.append("  </g>")
        lines.append("</svg>")
        return "\n".join(lines) + "\n"
