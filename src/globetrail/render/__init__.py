# SPDX-License-Identifier: Apache-2.0
"""Renderer registry and the built-in scene/timeline renderers."""

from __future__ import annotations

from . import scene_json as _scene_json  # noqa: F401
from . import scene_png as _scene_png  # noqa: F401
from . import timeline_png as _timeline_png  # noqa: F401
from .base import RenderBundle, RendererError, SceneRenderer
from .registry import (
    available,
    create,
    get,
    register,
    render,
    render_all,
    renderers_for,
)

__all__ = [
    "RenderBundle",
    "RendererError",
    "SceneRenderer",
    "available",
    "create",
    "get",
    "register",
    "render",
    "render_all",
    "renderers_for",
]
