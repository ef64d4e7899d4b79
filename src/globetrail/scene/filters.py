# SPDX-License-Identifier: Apache-2.0
"""Location filters: a single type key, or a multi-select over type, country and region.

Within one facet any selected value matches; across facets every non-empty
facet must match. Regions are resolved through an injected country -> region
mapping so the taxonomy lives in configuration rather than code.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Union

from globetrail.models.globe import Location

UNKNOWN_REGION = "Other"
TRAVEL = "travel"


@dataclass(frozen=True)
class LocationFilter:
    types: frozenset[str] = frozenset()
    countries: frozenset[str] = frozenset()
    regions: frozenset[str] = frozenset()
    region_map: Mapping[str, str] = field(
        default_factory=dict, compare=False, hash=False, repr=False
    )

    @classmethod
    def of(
        cls,
        *,
        types: Iterable[str] = (),
        countries: Iterable[str] = (),
        regions: Iterable[str] = (),
        region_map: Mapping[str, str] | None = None,
    ) -> LocationFilter:
        return cls(
            types=frozenset(types),
            countries=frozenset(countries),
            regions=frozenset(regions),
            region_map=dict(region_map or {}),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.types or self.countries or self.regions)

    @property
    def allows_journeys(self) -> bool:
        return not self.types or TRAVEL in self.types

    def region_of(self, country: str) -> str:
        return self.region_map.get(country, UNKNOWN_REGION)

    def matches(self, location: Location) -> bool:
        if self.types and location.type not in self.types:
            return False
        if self.countries and location.country not in self.countries:
            return False
        if self.regions and self.region_of(location.country) not in self.regions:
            return False
        return True


ActiveFilter = Union[str, LocationFilter, None]


def matches(active: ActiveFilter, location: Location) -> bool:
    if active is None:
        return True
    if isinstance(active, str):
        return location.type == active
    return active.matches(location)


def allows_journeys(active: ActiveFilter) -> bool:
    """Journeys are drawn only for "all" or the travel category."""
    if active is None:
        return True
    if isinstance(active, str):
        return active == TRAVEL
    return active.allows_journeys


def filter_locations(
    locations: Iterable[Location], active: ActiveFilter
) -> list[Location]:
    return [loc for loc in locations if matches(active, loc)]


def filter_options(
    locations: Iterable[Location], region_map: Mapping[str, str] | None = None
) -> dict[str, list[tuple[str, int]]]:
    """Facet values with counts for building multi-select controls.

    Values are sorted alphabetically within each facet.
    """
    region_map = region_map or {}
    locations = list(locations)
    types = Counter(loc.type for loc in locations)
    countries = Counter(loc.country for loc in locations)
    regions = Counter(region_map.get(loc.country, UNKNOWN_REGION) for loc in locations)
    return {
        "types": sorted(types.items()),
        "countries": sorted(countries.items()),
        "regions": sorted(regions.items()),
    }
