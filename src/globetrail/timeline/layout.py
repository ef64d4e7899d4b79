# SPDX-License-Identifier: Apache-2.0
"""Gantt layout of work history.

The axis runs from the earliest start date (right) to ``now`` (left), so the
most recent work sits at the left edge. Positions are percentages of the
chart width; a margin on each side leaves room for padding.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from dateutil.relativedelta import relativedelta

from globetrail.config import TimelineSettings
from globetrail.models.timeline import IntervalKind, WorkInterval

from .dates import TimelineDateError, format_date_short, parse_date

LOGGER = logging.getLogger(__name__)

SECTION_LABELS: dict[str, str] = {"work": "Work", "volunteer": "Volunteering"}


@dataclass(frozen=True, slots=True)
class YearMarker:
    year: int
    label: str
    position: float


@dataclass(frozen=True, slots=True)
class TimelineBar:
    interval: WorkInterval
    start: dt.date
    end: dt.date
    left: float
    width: float
    duration_label: str
    date_label: str
    is_current: bool


@dataclass(frozen=True, slots=True)
class OrganizationGroup:
    organization: str
    bars: tuple[TimelineBar, ...]

    @property
    def latest_start(self) -> dt.date:
        return max(b.start for b in self.bars)


@dataclass(frozen=True, slots=True)
class TimelineSection:
    kind: IntervalKind
    label: str
    groups: tuple[OrganizationGroup, ...]

    @property
    def item_count(self) -> int:
        return sum(len(g.bars) for g in self.groups)


@dataclass(frozen=True)
class Timeline:
    start: dt.date
    end: dt.date
    total_days: float
    year_markers: tuple[YearMarker, ...] = ()
    sections: tuple[TimelineSection, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.sections

    @property
    def item_count(self) -> int:
        return sum(s.item_count for s in self.sections)

    def bars(self) -> list[TimelineBar]:
        return [b for s in self.sections for g in s.groups for b in g.bars]

    def section(self, kind: str) -> TimelineSection | None:
        for s in self.sections:
            if s.kind == kind:
                return s
        return None


def format_duration(months: int) -> str:
    years, rest = divmod(max(months, 0), 12)
    if years > 0:
        return f"{years}y {rest}m" if rest else f"{years}y"
    return f"{months}m"


class TimelineLayout:
    """Compute bar geometry for work and volunteering intervals.

    ``now`` pins the time axis end (and what ``current`` means); it defaults
    to today at layout time.
    """

    def __init__(
        self, now: dt.date | None = None, settings: TimelineSettings | None = None
    ) -> None:
        self.now = now
        self.settings = settings or TimelineSettings()

    def duration_months(self, start: dt.date, end: dt.date) -> int:
        if self.settings.duration_mode == "calendar":
            delta = relativedelta(end, start)
            return delta.years * 12 + delta.months
        return (end - start).days // 30

    def _position(self, axis_end: dt.date, date: dt.date, total: float) -> float:
        s = self.settings
        return s.margin + (axis_end - date).days / total * s.band

    def layout(self, intervals: Iterable[WorkInterval]) -> Timeline:
        now = self.now or dt.date.today()
        parsed: list[tuple[WorkInterval, dt.date, dt.date]] = []
        for item in intervals:
            try:
                start = parse_date(item.start_date, now)
                end = parse_date(item.end_date, now)
            except TimelineDateError as exc:
                LOGGER.warning(
                    "Skipping %s at %s: %s", item.position, item.organization, exc
                )
                continue
            if end < start:
                LOGGER.warning(
                    "Skipping %s at %s: ends before it starts",
                    item.position,
                    item.organization,
                )
                continue
            parsed.append((item, start, end))

        if not parsed:
            return Timeline(start=now, end=now, total_days=1.0)

        axis_start = min(start for _, start, _ in parsed)
        axis_end = now
        total = float((axis_end - axis_start).days)
        if total <= 0:
            total = 1.0

        s = self.settings
        bars: list[TimelineBar] = []
        for item, start, end in parsed:
            # the axis stops at now; future dates are drawn at its edge
            drawn_start, drawn_end = min(start, axis_end), min(end, axis_end)
            width = (drawn_end - drawn_start).days / total * s.band
            months = self.duration_months(start, end)
            end_label = "Present" if item.is_current else format_date_short(end)
            bars.append(
                TimelineBar(
                    interval=item,
                    start=start,
                    end=end,
                    left=self._position(axis_end, drawn_end, total),
                    width=max(width, s.min_width),
                    duration_label=format_duration(months),
                    date_label=f"{format_date_short(start)} - {end_label}",
                    is_current=item.is_current,
                )
            )

        sections = []
        for kind in ("work", "volunteer"):
            groups = _group_by_organization(b for b in bars if b.interval.kind == kind)
            if groups:
                sections.append(TimelineSection(kind, SECTION_LABELS[kind], groups))

        markers = tuple(
            YearMarker(
                year=year,
                label=str(year),
                position=self._position(axis_end, dt.date(year, 1, 1), total),
            )
            for year in range(axis_end.year, axis_start.year - 1, -1)
        )
        LOGGER.debug(
            "Laid out %d intervals from %s to %s", len(bars), axis_start, axis_end
        )
        return Timeline(
            start=axis_start,
            end=axis_end,
            total_days=total,
            year_markers=markers,
            sections=tuple(sections),
        )


def _group_by_organization(bars: Iterable[TimelineBar]) -> tuple[OrganizationGroup, ...]:
    grouped: dict[str, list[TimelineBar]] = {}
    for bar in bars:
        grouped.setdefault(bar.interval.organization, []).append(bar)
    groups = [
        OrganizationGroup(org, tuple(sorted(items, key=lambda b: b.start, reverse=True)))
        for org, items in grouped.items()
    ]
    groups.sort(key=lambda g: g.latest_start, reverse=True)
    return tuple(groups)


def layout_timeline(
    intervals: Sequence[WorkInterval],
    *,
    now: dt.date | None = None,
    settings: TimelineSettings | None = None,
) -> Timeline:
    return TimelineLayout(now, settings).layout(intervals)
