# SPDX-License-Identifier: Apache-2.0
from .globe import LOCATION_TYPES, GlobeData, Journey, Location, LocationType
from .loader import GlobeDataError, load_globe_data, load_work_intervals
from .timeline import IntervalKind, WorkInterval

__all__ = [
    "LOCATION_TYPES",
    "GlobeData",
    "GlobeDataError",
    "IntervalKind",
    "Journey",
    "Location",
    "LocationType",
    "WorkInterval",
    "load_globe_data",
    "load_work_intervals",
]
