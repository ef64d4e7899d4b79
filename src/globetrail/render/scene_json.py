# SPDX-License-Identifier: Apache-2.0
"""Write a composed scene as JSON for a browser front-end to paint."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from globetrail.scene.composer import Scene
from globetrail.utils.serialize import to_list, to_obj

from .base import RenderBundle, SceneRenderer
from .registry import register

LOGGER = logging.getLogger(__name__)


def scene_document(scene: Scene, tooltip: Any = None) -> dict[str, Any]:
    """Plain JSON structure for ``scene`` with layers in paint order."""

    doc: dict[str, Any] = {
        "mode": scene.state.mode.value,
        "width": scene.state.width,
        "height": scene.state.height,
        "rotation": list(scene.state.rotation),
        "zoom": to_obj(scene.state.zoom),
        "layers": list(scene.layers()),
        "outline": to_obj(scene.outline),
        "graticule": to_obj(scene.graticule),
        "countries": to_list(scene.countries),
        "journeys": [
            {
                "journey_id": seg.journey.id,
                "name": seg.journey.name,
                "from": seg.from_location.id,
                "to": seg.to_location.id,
                "path": to_obj(seg.path),
                "selected": seg.is_selected,
                "color": seg.color,
                "stroke_width": seg.stroke_width,
                "opacity": seg.opacity,
                "stops": seg.stops,
            }
            for seg in scene.journey_segments
        ],
        "markers": [
            {
                "id": m.location.id,
                "type": m.location.type,
                "x": m.screen_pos[0],
                "y": m.screen_pos[1],
                "radius": m.radius,
                "color": m.color,
                "stroke": m.stroke,
                "stroke_width": m.stroke_width,
                "visible": m.visible,
                "selected": m.selected,
                "location": to_obj(m.location),
            }
            for m in scene.markers
        ],
    }
    if tooltip is not None:
        doc["tooltip"] = to_obj(tooltip)
    return doc


@register
class SceneJsonRenderer(SceneRenderer):
    slug = "scene-json"
    description = "Composed scene as a JSON document of screen-space primitives."
    subject_type = Scene
    default_filename = "scene.json"

    def build(self, *, output_dir: Path) -> RenderBundle:
        scene = self.target()
        output_dir = Path(output_dir)
        path = self.output_path(output_dir)
        doc = scene_document(scene, self._options.get("tooltip"))
        indent = self._options.get("indent", 2)
        path.write_text(json.dumps(doc, indent=indent) + "\n", encoding="utf-8")
        LOGGER.debug(
            "Wrote %d markers and %d journey segments to %s",
            len(scene.markers),
            len(scene.journey_segments),
            path,
        )
        return RenderBundle(output_dir=output_dir, primary=path)
