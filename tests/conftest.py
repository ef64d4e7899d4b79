# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import pytest

from globetrail.config import Settings
from globetrail.geo.projection import GeoProjector
from globetrail.models import GlobeData, load_globe_data

SAMPLE_DOC = {
    "locations": [
        {
            "id": "a",
            "name": "Takoradi",
            "country": "Ghana",
            "latitude": 0.0,
            "longitude": 0.0,
            "type": "travel",
        },
        {
            "id": "b",
            "name": "Indian Ocean",
            "country": "Sri Lanka",
            "latitude": 0.0,
            "longitude": 90.0,
            "type": "travel",
            "date": "2019",
        },
        {
            "id": "c",
            "name": "Tokyo",
            "country": "Japan",
            "latitude": 35.7,
            "longitude": 139.7,
            "type": "deployment",
            "title": "Field office",
        },
        {
            "id": "t",
            "name": "Frankfurt",
            "country": "Germany",
            "latitude": 50.1,
            "longitude": 8.7,
            "type": "training",
            "date": "2021",
        },
    ],
    "journeys": [
        {"id": "j1", "name": "Eastbound", "locations": ["a", "b", "c"]},
    ],
}


@pytest.fixture
def sample_doc() -> dict:
    return SAMPLE_DOC


@pytest.fixture
def sample_data() -> GlobeData:
    return load_globe_data(SAMPLE_DOC)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def globe() -> GeoProjector:
    return GeoProjector.globe(600)


@pytest.fixture
def flat_map() -> GeoProjector:
    # 650px wide: scale 100, height 390
    return GeoProjector.flat_map(650)
