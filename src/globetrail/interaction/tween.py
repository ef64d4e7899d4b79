# SPDX-License-Identifier: Apache-2.0
"""Easing and rotation interpolation for programmatic globe moves."""

from __future__ import annotations

import math

Rotation = tuple[float, float, float]


def cubic_in_out(t: float) -> float:
    t = min(max(t, 0.0), 1.0) * 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


def shortest_target(origin: Rotation, target: Rotation) -> Rotation:
    """Shift ``target`` longitude by whole turns so the tween takes the short way."""
    delta = math.remainder(target[0] - origin[0], 360.0)
    return origin[0] + delta, target[1], target[2]


def interpolate_rotation(origin: Rotation, target: Rotation, t: float) -> Rotation:
    return (
        origin[0] + (target[0] - origin[0]) * t,
        origin[1] + (target[1] - origin[1]) * t,
        origin[2] + (target[2] - origin[2]) * t,
    )
