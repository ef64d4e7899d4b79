# SPDX-License-Identifier: Apache-2.0
"""Load globe and work-history documents into typed records.

Individual malformed records are skipped with a warning so one bad entry never
hides the rest of the document. A document that cannot be read at all yields
an empty ``GlobeData`` unless ``strict=True`` is requested.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from globetrail.utils.io_utils import read_json

from .globe import GlobeData, Journey, Location
from .timeline import WorkInterval

LOGGER = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class GlobeDataError(ValueError):
    """Raised when a globe document cannot be read or has the wrong shape."""


def _validate_each(
    model: type[_ModelT], items: Iterable[Any], label: str
) -> list[_ModelT]:
    out: list[_ModelT] = []
    for idx, raw in enumerate(items):
        try:
            out.append(model.model_validate(raw))
        except ValidationError as exc:
            ident = raw.get("id") if isinstance(raw, Mapping) else None
            errors = exc.errors()
            detail = errors[0].get("msg", str(exc)) if errors else str(exc)
            LOGGER.warning(
                "Skipping %s #%d%s: %s",
                label,
                idx,
                f" ({ident})" if ident else "",
                detail,
            )
    return out


def _read_document(source: str | Path | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(source, Mapping):
        return source
    try:
        data = read_json(source)
    except FileNotFoundError as exc:
        raise GlobeDataError(f"Globe data not found: {source}") from exc
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise GlobeDataError(f"Failed to read globe data from {source}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise GlobeDataError("Globe data must be a JSON object")
    return data


def load_globe_data(
    source: str | Path | Mapping[str, Any], *, strict: bool = False
) -> GlobeData:
    """Build ``GlobeData`` from a path, ``'-'`` (stdin) or an already decoded mapping."""

    try:
        doc = _read_document(source)
    except GlobeDataError:
        if strict:
            raise
        LOGGER.error("Globe data unavailable; rendering an empty scene", exc_info=True)
        return GlobeData.empty()

    raw_locations = doc.get("locations") or []
    raw_journeys = doc.get("journeys") or []
    if not isinstance(raw_locations, list) or not isinstance(raw_journeys, list):
        if strict:
            raise GlobeDataError("'locations' and 'journeys' must be arrays")
        LOGGER.error("Globe data has non-array locations/journeys; ignoring it")
        return GlobeData.empty()

    locations = _validate_each(Location, raw_locations, "location")
    seen: set[str] = set()
    unique: list[Location] = []
    for loc in locations:
        if loc.id in seen:
            LOGGER.warning("Duplicate location id %s; keeping the first", loc.id)
            continue
        seen.add(loc.id)
        unique.append(loc)
    journeys = _validate_each(Journey, raw_journeys, "journey")
    LOGGER.debug("Loaded %d locations and %d journeys", len(unique), len(journeys))
    return GlobeData(locations=tuple(unique), journeys=tuple(journeys))


def load_work_intervals(
    work: Iterable[Mapping[str, Any]] = (),
    volunteering: Iterable[Mapping[str, Any]] = (),
) -> list[WorkInterval]:
    """Validate CV work and volunteering entries into ``WorkInterval`` records."""

    items = [{**dict(w), "kind": "work"} for w in work]
    items += [{**dict(v), "kind": "volunteer"} for v in volunteering]
    return _validate_each(WorkInterval, items, "work interval")
