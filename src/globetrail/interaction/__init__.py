# SPDX-License-Identifier: Apache-2.0
"""Interactive view control: spin, drag, zoom, selection and tooltips."""

from globetrail.scene.selection import NO_SELECTION, SelectionState

from .controller import (
    HIDDEN_TOOLTIP,
    InteractionController,
    Tooltip,
    TooltipContent,
    ViewState,
)
from .ticker import ManualTicker, Ticker
from .tween import cubic_in_out, interpolate_rotation

__all__ = [
    "HIDDEN_TOOLTIP",
    "InteractionController",
    "ManualTicker",
    "NO_SELECTION",
    "SelectionState",
    "Ticker",
    "Tooltip",
    "TooltipContent",
    "ViewState",
    "cubic_in_out",
    "interpolate_rotation",
]
