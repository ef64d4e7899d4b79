from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel

"""Lightweight serializers for globetrail objects (dataclasses, models, containers).

Scene values are frozen dataclasses holding pydantic records and tuples of
coordinates; ``to_obj`` flattens them into plain JSON-compatible structures.
"""


def to_obj(x: Any) -> Any:
    """Convert a value to a JSON-serializable object when possible.

    - Pydantic models → ``model_dump`` using field aliases
    - Dataclasses → dict of converted fields
    - Enums → their value
    - Tuples, lists and mappings are converted recursively
    - Primitives are returned as-is
    """
    if isinstance(x, BaseModel):
        return x.model_dump(by_alias=True, exclude_none=True)
    if is_dataclass(x) and not isinstance(x, type):
        return {f.name: to_obj(getattr(x, f.name)) for f in fields(x)}
    if isinstance(x, Enum):
        return x.value
    if isinstance(x, dict):
        return {str(k): to_obj(v) for k, v in x.items()}
    if isinstance(x, (list, tuple, frozenset, set)):
        items = sorted(x) if isinstance(x, (set, frozenset)) else x
        return [to_obj(i) for i in items]
    return x


def to_list(items: Iterable[Any]) -> list[Any]:
    """Convert an iterable of values via to_obj, returning a list."""
    return [to_obj(i) for i in items]
