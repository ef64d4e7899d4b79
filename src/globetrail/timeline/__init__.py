# SPDX-License-Identifier: Apache-2.0
"""Gantt-style work history layout."""

from .dates import TimelineDateError, format_date_short, parse_date
from .layout import (
    OrganizationGroup,
    Timeline,
    TimelineBar,
    TimelineLayout,
    TimelineSection,
    YearMarker,
    format_duration,
    layout_timeline,
)

__all__ = [
    "OrganizationGroup",
    "Timeline",
    "TimelineBar",
    "TimelineDateError",
    "TimelineLayout",
    "TimelineSection",
    "YearMarker",
    "format_date_short",
    "format_duration",
    "layout_timeline",
    "parse_date",
]
