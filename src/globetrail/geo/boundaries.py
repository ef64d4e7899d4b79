# SPDX-License-Identifier: Apache-2.0
"""World boundary layer used as the map background.

Countries are read once from a GeoJSON FeatureCollection, a TopoJSON topology
(the ``world-110m`` style documents with quantized, delta-encoded arcs) or an
ESRI shapefile. Only exterior rings are kept: the layer is drawn as a
backdrop and used to highlight countries that contain a marker. Containment
is answered by shapely polygons built once per ring.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Sequence

import numpy as np
import shapefile  # pyshp
from shapely import contains_xy
from shapely.geometry import Polygon

LOGGER = logging.getLogger(__name__)

Ring = tuple[tuple[float, float], ...]


class BoundaryLoadError(ValueError):
    """Raised when a boundary document cannot be interpreted."""


@dataclass(frozen=True)
class CountryShape:
    name: str
    rings: tuple[Ring, ...]
    id: str | None = None

    @cached_property
    def bbox(self) -> tuple[float, float, float, float] | None:
        points = [p for ring in self.rings for p in ring]
        if not points:
            return None
        arr = np.asarray(points, dtype=float)
        return (
            float(arr[:, 0].min()),
            float(arr[:, 1].min()),
            float(arr[:, 0].max()),
            float(arr[:, 1].max()),
        )

    @cached_property
    def polygons(self) -> tuple[Polygon, ...]:
        return tuple(Polygon(ring) for ring in self.rings if len(ring) >= 3)


def _coord_pair(coord: Iterable[Any]) -> tuple[float, float]:
    seq = list(coord)
    if len(seq) < 2:
        raise ValueError("Coordinate must have at least two values")
    return float(seq[0]), float(seq[1])


def _ring(coords: Iterable[Any]) -> Ring:
    points = []
    for coord in coords:
        try:
            points.append(_coord_pair(coord))
        except (TypeError, ValueError):
            continue
    return tuple(points)


def _sequence(value: Any) -> Sequence[Any]:
    if isinstance(value, Sequence) and not isinstance(value, str):
        return value
    return ()


def _exterior(polygon: Any) -> Ring:
    polygon = _sequence(polygon)
    if not polygon:
        return ()
    return _ring(_sequence(polygon[0]))


def _iter_polygon_rings(geometry: Any) -> Iterator[Ring]:
    if not isinstance(geometry, Mapping):
        return
    gtype = geometry.get("type")
    if gtype == "Polygon":
        ring = _exterior(geometry.get("coordinates"))
        if ring:
            yield ring
    elif gtype == "MultiPolygon":
        for polygon in _sequence(geometry.get("coordinates")):
            ring = _exterior(polygon)
            if ring:
                yield ring
    elif gtype == "GeometryCollection":
        for geom in _sequence(geometry.get("geometries")):
            yield from _iter_polygon_rings(geom)


def _feature_name(props: Any, fallback: str) -> str:
    if not isinstance(props, Mapping):
        return fallback
    for key in ("name", "NAME", "ADMIN", "admin", "NAME_EN", "name_en"):
        value = props.get(key)
        if value:
            return str(value)
    return fallback


def countries_from_geojson(doc: Mapping[str, Any]) -> list[CountryShape]:
    if doc.get("type") != "FeatureCollection":
        raise BoundaryLoadError("GeoJSON boundaries must be a FeatureCollection")
    shapes: list[CountryShape] = []
    for idx, feature in enumerate(_sequence(doc.get("features"))):
        if not isinstance(feature, Mapping):
            LOGGER.debug("Skipping GeoJSON feature #%d: not an object", idx)
            continue
        geometry = feature.get("geometry")
        rings = tuple(_iter_polygon_rings(geometry))
        if not rings:
            continue
        fid = feature.get("id")
        fallback = str(fid if fid is not None else idx)
        shapes.append(
            CountryShape(
                name=_feature_name(feature.get("properties"), fallback),
                rings=rings,
                id=None if fid is None else str(fid),
            )
        )
    return shapes


def _decode_arcs(topology: Mapping[str, Any]) -> list[list[tuple[float, float]]]:
    transform = topology.get("transform")
    arcs: list[list[tuple[float, float]]] = []
    for raw in topology.get("arcs") or []:
        if transform:
            sx, sy = transform["scale"]
            tx, ty = transform["translate"]
            x = y = 0.0
            points = []
            for pos in raw:
                x += pos[0]
                y += pos[1]
                points.append((x * sx + tx, y * sy + ty))
        else:
            points = [(float(p[0]), float(p[1])) for p in raw]
        arcs.append(points)
    return arcs


def _stitch(arcs: list[list[tuple[float, float]]], refs: Sequence[int]) -> Ring:
    points: list[tuple[float, float]] = []
    for ref in refs:
        arc = arcs[~ref][::-1] if ref < 0 else arcs[ref]
        # consecutive arcs share their joining point
        points.extend(arc[1:] if points else arc)
    return tuple(points)


def countries_from_topojson(
    topology: Mapping[str, Any], object_name: str = "countries"
) -> list[CountryShape]:
    if topology.get("type") != "Topology":
        raise BoundaryLoadError("TopoJSON boundaries must be a Topology")
    objects = topology.get("objects")
    if not isinstance(objects, Mapping) or object_name not in objects:
        raise BoundaryLoadError(f"TopoJSON object not found: {object_name}")
    collection = objects[object_name]
    if not isinstance(collection, Mapping):
        raise BoundaryLoadError(f"TopoJSON object is not a geometry: {object_name}")
    arcs = _decode_arcs(topology)
    geometries = _sequence(collection.get("geometries")) or [collection]
    shapes: list[CountryShape] = []
    for idx, geom in enumerate(geometries):
        if not isinstance(geom, Mapping):
            LOGGER.debug("Skipping TopoJSON geometry #%d: not an object", idx)
            continue
        gtype = geom.get("type")
        if gtype == "Polygon":
            polygons = [geom.get("arcs")]
        elif gtype == "MultiPolygon":
            polygons = list(_sequence(geom.get("arcs")))
        else:
            continue
        rings = []
        for polygon in polygons:
            polygon = _sequence(polygon)
            if not polygon:
                continue
            try:
                ring = _stitch(arcs, _sequence(polygon[0]))
            except (IndexError, TypeError):
                LOGGER.warning("TopoJSON geometry #%d references a missing arc", idx)
                continue
            if ring:
                rings.append(ring)
        if not rings:
            continue
        gid = geom.get("id")
        shapes.append(
            CountryShape(
                name=_feature_name(
                    geom.get("properties"), str(gid if gid is not None else idx)
                ),
                rings=tuple(rings),
                id=None if gid is None else str(gid),
            )
        )
    return shapes


def countries_from_shapefile(path: str | Path) -> list[CountryShape]:
    shp_path = Path(path)
    if not shp_path.exists():
        raise FileNotFoundError(f"Shapefile not found: {shp_path}")
    shapes: list[CountryShape] = []
    with shapefile.Reader(str(shp_path)) as reader:
        field_names = [f[0] for f in reader.fields[1:]]  # skip deletion flag
        for idx in range(len(reader)):
            record = reader.record(idx)
            props = {name: record[i] for i, name in enumerate(field_names)}
            geometry = getattr(reader.shape(idx), "__geo_interface__", None) or {}
            rings = tuple(_iter_polygon_rings(geometry))
            if rings:
                shapes.append(
                    CountryShape(name=_feature_name(props, str(idx)), rings=rings)
                )
    return shapes


def load_boundaries(
    source: str | Path | Mapping[str, Any], *, object_name: str = "countries"
) -> list[CountryShape]:
    """Load countries from a TopoJSON/GeoJSON document, path or shapefile.

    Missing or unreadable sources degrade to an empty layer: the background
    is decorative and must never prevent markers from rendering.
    """

    try:
        if isinstance(source, Mapping):
            doc = source
        else:
            path = Path(source)
            if path.suffix.lower() == ".shp":
                return countries_from_shapefile(path)
            doc = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(doc, Mapping):
            raise BoundaryLoadError("Boundary document must be a JSON object")
        if doc.get("type") == "Topology":
            shapes = countries_from_topojson(doc, object_name)
        else:
            shapes = countries_from_geojson(doc)
    except (
        OSError, ValueError, KeyError, TypeError, shapefile.ShapefileException
    ) as exc:
        LOGGER.warning("World boundaries unavailable (%s); drawing none", exc)
        return []
    LOGGER.debug("Loaded %d country shapes", len(shapes))
    return shapes


def contains(shape: CountryShape, lon: float, lat: float) -> bool:
    bbox = shape.bbox
    if bbox is None:
        return False
    if not (bbox[0] <= lon <= bbox[2] and bbox[1] <= lat <= bbox[3]):
        return False
    return any(bool(contains_xy(polygon, lon, lat)) for polygon in shape.polygons)


def highlighted_countries(
    shapes: Iterable[CountryShape], points: Iterable[tuple[float, float]]
) -> frozenset[str]:
    """Names of the countries containing at least one of ``points``."""
    pts = np.asarray(
        [p for p in points if np.isfinite(p[0]) and np.isfinite(p[1])], dtype=float
    ).reshape(-1, 2)
    hits: set[str] = set()
    if not len(pts):
        return frozenset()
    for shape in shapes:
        if any(
            contains_xy(poly, pts[:, 0], pts[:, 1]).any() for poly in shape.polygons
        ):
            hits.add(shape.name)
    return frozenset(hits)
