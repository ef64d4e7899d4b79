# SPDX-License-Identifier: Apache-2.0
"""Gantt chart of work history drawn with matplotlib."""

from __future__ import annotations

import logging
from pathlib import Path

from matplotlib.figure import Figure

from globetrail.timeline.layout import Timeline

from .base import RenderBundle, SceneRenderer
from .registry import register

LOGGER = logging.getLogger(__name__)

SECTION_COLORS = {"work": "#3b82f6", "volunteer": "#10b981"}
ROW_HEIGHT_IN = 0.35


@register
class TimelinePngRenderer(SceneRenderer):
    slug = "timeline-png"
    description = "Work and volunteering Gantt chart, most recent on the left."
    subject = "timeline"
    subject_type = Timeline
    default_filename = "timeline.png"

    def build(self, *, output_dir: Path) -> RenderBundle:
        timeline = self.target()
        output_dir = Path(output_dir)
        path = self.output_path(output_dir)
        dpi = float(self._options.get("dpi", 100))
        width_in = float(self._options.get("width", 900)) / dpi

        labels: list[str] = []
        rows = []
        for section in timeline.sections:
            labels.append(section.label.upper())
            rows.append(None)
            for group in section.groups:
                for bar in group.bars:
                    labels.append(f"{bar.interval.position} ({group.organization})")
                    rows.append((section.kind, bar))

        fig = Figure(
            figsize=(width_in, max(1.0, ROW_HEIGHT_IN * (len(rows) + 1))), dpi=dpi
        )
        ax = fig.add_subplot(1, 1, 1)
        for idx, row in enumerate(rows):
            if row is None:
                continue
            kind, bar = row
            ax.barh(
                idx,
                bar.width,
                left=bar.left,
                height=0.6,
                color=SECTION_COLORS.get(kind, "#6b7280"),
            )
            ax.text(
                bar.left + bar.width + 0.5,
                idx,
                bar.duration_label,
                va="center",
                fontsize=7,
            )
        for marker in timeline.year_markers:
            if 0.0 <= marker.position <= 100.0:
                ax.axvline(marker.position, color="#e5e7eb", linewidth=0.8, zorder=0)
        ax.set_xlim(0, 100)
        ax.set_ylim(max(len(rows), 1) - 0.5, -0.5)
        ax.set_yticks(range(len(labels)))
        ax.set_yticklabels(labels, fontsize=8)
        visible = [m for m in timeline.year_markers if 0.0 <= m.position <= 100.0]
        ax.set_xticks([m.position for m in visible])
        ax.set_xticklabels([m.label for m in visible], fontsize=8)
        ax.xaxis.tick_top()
        fig.tight_layout()
        fig.savefig(path, dpi=dpi)
        LOGGER.debug(
            "Saved timeline chart with %d bars to %s", timeline.item_count, path
        )
        return RenderBundle(output_dir=output_dir, primary=path)
