# SPDX-License-Identifier: Apache-2.0
"""Output formats keyed by slug, and lookup by what they can draw."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, TypeVar

from .base import RenderBundle, SceneRenderer

LOGGER = logging.getLogger(__name__)

_RendererT = TypeVar("_RendererT", bound=SceneRenderer)

_REGISTRY: dict[str, type[SceneRenderer]] = {}


def register(renderer_cls: type[_RendererT]) -> type[_RendererT]:
    if not issubclass(renderer_cls, SceneRenderer):
        raise TypeError("renderer must inherit SceneRenderer")
    slug = renderer_cls.slug
    if not slug:
        raise ValueError("renderer slug must be non-empty")
    if slug in _REGISTRY:
        raise ValueError(f"renderer slug already registered: {slug}")
    if not renderer_cls.default_filename:
        raise ValueError(f"renderer {slug} needs a default filename")
    _REGISTRY[slug] = renderer_cls
    return renderer_cls


def get(slug: str) -> type[SceneRenderer]:
    try:
        return _REGISTRY[slug]
    except KeyError as exc:
        known = ", ".join(sorted(_REGISTRY)) or "none"
        raise KeyError(f"unknown renderer slug: {slug} (known: {known})") from exc


def create(slug: str, **options: Any) -> SceneRenderer:
    return get(slug)(**options)


def available(subject: str | None = None) -> Iterable[type[SceneRenderer]]:
    """Registered renderers, optionally only those drawing ``subject``."""
    return [cls for cls in _REGISTRY.values() if subject in (None, cls.subject)]


def renderers_for(obj: Any) -> list[str]:
    """Slugs of every renderer able to draw ``obj``."""
    return [slug for slug, cls in _REGISTRY.items() if cls.accepts(obj)]


def render(slug: str, output_dir: Path | str, **options: Any) -> RenderBundle:
    renderer = create(slug, **options)
    LOGGER.debug("Rendering %s into %s", slug, output_dir)
    return renderer.build(output_dir=Path(output_dir))


def render_all(
    obj: Any, output_dir: Path | str, **options: Any
) -> dict[str, RenderBundle]:
    """Write ``obj`` with every renderer that accepts it.

    ``options`` are shared by all of them; ``filename`` is ignored so the
    outputs do not overwrite each other.
    """
    options.pop("filename", None)
    slugs = renderers_for(obj)
    if not slugs:
        LOGGER.warning("No renderer draws %s", type(obj).__name__)
    return {
        slug: render(slug, output_dir, **{**options, get(slug).subject: obj})
        for slug in slugs
    }
