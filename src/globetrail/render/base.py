# SPDX-License-Identifier: Apache-2.0
"""Renderers write a composed scene or a timeline layout to disk.

Each renderer declares the one object it draws: ``subject`` names the option
it is passed under and ``subject_type`` the class it must be. The registry
uses both to pick every renderer able to draw a given object.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Sequence


class RendererError(ValueError):
    """Raised when a renderer is missing input or cannot write its output."""


@dataclass(slots=True)
class RenderBundle:
    output_dir: Path
    primary: Path
    assets: Sequence[Path] = field(default_factory=tuple)


class SceneRenderer(ABC):
    slug: ClassVar[str] = ""
    description: ClassVar[str] = ""
    subject: ClassVar[str] = "scene"
    subject_type: ClassVar[type] = object
    default_filename: ClassVar[str] = ""

    def __init__(self, **options: Any) -> None:
        self._options: dict[str, Any] = dict(options)

    @classmethod
    def accepts(cls, obj: Any) -> bool:
        return isinstance(obj, cls.subject_type)

    def configure(self, **options: Any) -> None:
        self._options.update(options)

    def target(self) -> Any:
        """The scene or timeline handed in under ``subject``."""
        value = self._options.get(self.subject)
        if not self.accepts(value):
            raise RendererError(
                f"{self.slug} renderer requires a '{self.subject}' option "
                f"of type {self.subject_type.__name__}"
            )
        return value

    def output_path(self, output_dir: Path) -> Path:
        output_dir.mkdir(parents=True, exist_ok=True)
        return output_dir / str(self._options.get("filename") or self.default_filename)

    @abstractmethod
    def build(self, *, output_dir: Path) -> RenderBundle:
        """Write the rendered output inside ``output_dir``."""

    def describe(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "description": self.description,
            "draws": self.subject,
            "filename": self.default_filename,
        }
