# SPDX-License-Identifier: Apache-2.0
"""Static PNG snapshot of a composed scene drawn with matplotlib."""

from __future__ import annotations

import logging
from pathlib import Path

from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle

from globetrail.scene.composer import Scene

from .base import RenderBundle, SceneRenderer
from .registry import register

LOGGER = logging.getLogger(__name__)

OCEAN = "#dbeafe"
LAND_LINE = "#94a3b8"
HIGHLIGHT_LINE = "#475569"
GRATICULE = "#cbd5e1"
POINTS_PER_INCH = 72.0


def _px_to_points(px: float, dpi: float) -> float:
    return px * POINTS_PER_INCH / dpi


def draw_scene(ax: Axes, scene: Scene, dpi: float) -> None:
    """Paint ``scene`` onto ``ax`` in pixel coordinates, layer by layer."""

    outline = scene.outline
    if outline.kind == "circle":
        ax.add_patch(
            Circle((outline.x, outline.y), outline.radius, color=OCEAN, zorder=1)
        )
    else:
        ax.add_patch(
            Rectangle(
                (outline.x, outline.y),
                outline.width,
                outline.height,
                color=OCEAN,
                zorder=1,
            )
        )
    for line in scene.graticule:
        xs, ys = zip(*line)
        ax.plot(xs, ys, color=GRATICULE, linewidth=0.5, zorder=2)
    for country in scene.countries:
        for line in country.path:
            xs, ys = zip(*line)
            ax.plot(
                xs,
                ys,
                color=HIGHLIGHT_LINE if country.highlighted else LAND_LINE,
                linewidth=1.2 if country.highlighted else 0.6,
                zorder=3,
            )
    for seg in scene.journey_segments:
        for line in seg.path:
            xs, ys = zip(*line)
            ax.plot(
                xs,
                ys,
                color=seg.color,
                linewidth=_px_to_points(seg.stroke_width, dpi),
                alpha=seg.opacity,
                linestyle="-",
                zorder=4,
            )
    visible = [m for m in scene.markers if m.visible]
    if visible:
        ax.scatter(
            [m.screen_pos[0] for m in visible],
            [m.screen_pos[1] for m in visible],
            s=[(2 * _px_to_points(m.radius, dpi)) ** 2 for m in visible],
            c=[m.color for m in visible],
            edgecolors=[m.stroke for m in visible],
            linewidths=[_px_to_points(m.stroke_width, dpi) for m in visible],
            zorder=5,
        )


@register
class ScenePngRenderer(SceneRenderer):
    slug = "scene-png"
    description = "Static matplotlib snapshot of a globe or flat map scene."
    subject_type = Scene
    default_filename = "scene.png"

    def build(self, *, output_dir: Path) -> RenderBundle:
        scene = self.target()
        output_dir = Path(output_dir)
        path = self.output_path(output_dir)
        dpi = float(self._options.get("dpi", 100))
        width, height = scene.state.width, scene.state.height

        fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_axis_off()
        draw_scene(ax, scene, dpi)
        fig.savefig(path, dpi=dpi, transparent=bool(self._options.get("transparent")))
        LOGGER.debug("Saved scene snapshot to %s", path)
        return RenderBundle(output_dir=output_dir, primary=path)
