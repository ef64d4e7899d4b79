# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import pytest

from globetrail.config import default_regions
from globetrail.scene import LocationFilter, SelectionState, filter_locations, filter_options
from globetrail.scene.filters import allows_journeys


def test_type_key_and_all(sample_data) -> None:
    assert len(filter_locations(sample_data.locations, None)) == 4
    assert [loc.id for loc in filter_locations(sample_data.locations, "deployment")] == ["c"]


def test_multi_select_facets(sample_data) -> None:
    regions = default_regions()
    asia_or_europe = LocationFilter.of(regions=["Asia", "Europe"], region_map=regions)
    assert {loc.id for loc in filter_locations(sample_data.locations, asia_or_europe)} == {
        "b",
        "c",
        "t",
    }
    combined = LocationFilter.of(
        types=["travel"], regions=["Asia"], region_map=regions
    )
    assert [loc.id for loc in filter_locations(sample_data.locations, combined)] == ["b"]
    assert LocationFilter.of().is_empty
    assert LocationFilter.of(countries=["Ghana"]).region_of("Ghana") == "Other"


def test_journeys_follow_travel_filter() -> None:
    assert allows_journeys(None)
    assert allows_journeys("travel")
    assert not allows_journeys("training")
    assert allows_journeys(LocationFilter.of(countries=["Japan"]))
    assert not allows_journeys(LocationFilter.of(types=["training"]))


def test_filter_options_counts(sample_data) -> None:
    options = filter_options(sample_data.locations, default_regions())
    assert options["types"] == [("deployment", 1), ("training", 1), ("travel", 2)]
    assert ("Asia", 2) in options["regions"]
    assert ("Other", 1) in options["regions"]


def test_selection_is_exclusive() -> None:
    sel = SelectionState().select_location("a")
    assert (sel.location_id, sel.journey_id) == ("a", None)
    sel = sel.select_journey("j1")
    assert (sel.location_id, sel.journey_id) == (None, "j1")
    sel = sel.select_location("b")
    assert sel.journey_id is None
    assert sel.cleared().is_empty
    with pytest.raises(ValueError):
        SelectionState(location_id="a", journey_id="j1")
