# SPDX-License-Identifier: Apache-2.0
"""Location and journey records shared by the globe and the flat map."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LocationType = Literal["deployment", "training", "travel"]

LOCATION_TYPES: tuple[str, ...] = ("deployment", "training", "travel")


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Location(_Record):
    """A single place shown as a marker.

    Longitude and latitude are expected in [-180, 180] x [-90, 90]; values
    outside that range are not rejected here, projection simply yields no
    screen position for them.
    """

    id: str
    name: str
    country: str
    latitude: float
    longitude: float
    type: LocationType
    title: str | None = None
    description: str | None = None
    date: str | None = None
    images: tuple[str, ...] = ()
    journey_id: str | None = Field(default=None, alias="journeyId")

    @property
    def coordinates(self) -> tuple[float, float]:
        return self.longitude, self.latitude


class Journey(_Record):
    """An ordered itinerary referencing locations by id."""

    id: str
    name: str
    description: str | None = None
    date: str | None = None
    color: str | None = None
    locations: tuple[str, ...] = ()
    images: tuple[str, ...] = ()


class GlobeData(_Record):
    locations: tuple[Location, ...] = ()
    journeys: tuple[Journey, ...] = ()

    @classmethod
    def empty(cls) -> GlobeData:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.locations and not self.journeys

    def location_index(self) -> dict[str, Location]:
        return {loc.id: loc for loc in self.locations}

    def resolve_journey(self, journey: Journey) -> list[Location]:
        """Return the journey's locations in order, dropping unknown ids."""
        index = self.location_index()
        return [index[i] for i in journey.locations if i in index]

    def journey(self, journey_id: str) -> Journey | None:
        for journey in self.journeys:
            if journey.id == journey_id:
                return journey
        return None

    def location(self, location_id: str) -> Location | None:
        return self.location_index().get(location_id)

    def countries(self) -> list[str]:
        """Distinct countries in first-seen order."""
        seen: dict[str, None] = {}
        for loc in self.locations:
            seen.setdefault(loc.country, None)
        return list(seen)
