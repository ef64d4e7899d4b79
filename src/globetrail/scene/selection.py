# SPDX-License-Identifier: Apache-2.0
"""Selected location/journey; the two are mutually exclusive."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SelectionState:
    location_id: str | None = None
    journey_id: str | None = None

    def __post_init__(self) -> None:
        if self.location_id is not None and self.journey_id is not None:
            raise ValueError("a location and a journey cannot be selected together")

    @property
    def is_empty(self) -> bool:
        return self.location_id is None and self.journey_id is None

    def select_location(self, location_id: str | None) -> SelectionState:
        return SelectionState(location_id=location_id)

    def select_journey(self, journey_id: str | None) -> SelectionState:
        return SelectionState(journey_id=journey_id)

    def cleared(self) -> SelectionState:
        return SelectionState()


NO_SELECTION = SelectionState()
