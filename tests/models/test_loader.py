# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import json

import pytest

from globetrail.models import GlobeData, GlobeDataError, load_globe_data, load_work_intervals


def test_load_from_path(tmp_path, sample_doc) -> None:
    path = tmp_path / "globe.json"
    path.write_text(json.dumps(sample_doc), encoding="utf-8")
    data = load_globe_data(path)
    assert [loc.id for loc in data.locations] == ["a", "b", "c", "t"]
    assert data.journey("j1").locations == ("a", "b", "c")
    assert data.countries() == ["Ghana", "Sri Lanka", "Japan", "Germany"]
    assert [loc.id for loc in data.resolve_journey(data.journey("j1"))] == ["a", "b", "c"]


def test_aliases_and_extras() -> None:
    data = load_globe_data(
        {
            "locations": [
                {
                    "id": "k",
                    "name": "Kinshasa",
                    "country": "DRC",
                    "latitude": -4.3,
                    "longitude": 15.3,
                    "type": "deployment",
                    "journeyId": "j9",
                    "images": ["a.jpg"],
                    "unused": True,
                }
            ]
        }
    )
    loc = data.location("k")
    assert loc.journey_id == "j9"
    assert loc.images == ("a.jpg",)
    assert loc.coordinates == (15.3, -4.3)


def test_bad_records_are_skipped(caplog) -> None:
    data = load_globe_data(
        {
            "locations": [
                {"id": "ok", "name": "A", "country": "B", "latitude": 1, "longitude": 2, "type": "travel"},
                {"id": "bad-type", "name": "A", "country": "B", "latitude": 1, "longitude": 2, "type": "holiday"},
                {"id": "no-coords", "name": "A", "country": "B", "type": "travel"},
                {"id": "ok", "name": "Dup", "country": "B", "latitude": 0, "longitude": 0, "type": "travel"},
            ],
            "journeys": [{"name": "missing id"}],
        }
    )
    assert [loc.id for loc in data.locations] == ["ok"]
    assert data.location("ok").name == "A"
    assert data.journeys == ()
    assert "bad-type" in caplog.text
    assert "Duplicate location id ok" in caplog.text


def test_unreadable_document(tmp_path) -> None:
    missing = tmp_path / "nope.json"
    assert load_globe_data(missing) == GlobeData.empty()
    with pytest.raises(GlobeDataError):
        load_globe_data(missing, strict=True)
    broken = tmp_path / "broken.json"
    broken.write_text("[1, 2]", encoding="utf-8")
    assert load_globe_data(broken).is_empty
    with pytest.raises(GlobeDataError):
        load_globe_data({"locations": {"a": 1}}, strict=True)


def test_work_intervals_from_cv() -> None:
    intervals = load_work_intervals(
        work=[{"position": "Lead", "company": "Acme", "startDate": "2020"}],
        volunteering=[
            {"position": "Mentor", "organization": "Club", "startDate": "2019", "endDate": "2021"},
            {"position": "No dates", "organization": "Club"},
        ],
    )
    assert [(i.organization, i.kind) for i in intervals] == [
        ("Acme", "work"),
        ("Club", "volunteer"),
    ]
    assert intervals[0].is_current
    assert not intervals[1].is_current
