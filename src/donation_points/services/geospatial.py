"""Geospatial helper functions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from shapely.geometry import Point, Polygon, box

EARTH_RADIUS_KM = 6371.0
# Bounds are rounded so a point exactly one radius away is not pushed out by float error.
BOUND_DECIMALS = 9


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


@dataclass(slots=True, frozen=True)
class BoundingBox:
    """Axis-aligned latitude/longitude range, inclusive on every edge."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float
    polygon: Polygon = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "polygon", box(self.min_lon, self.min_lat, self.max_lon, self.max_lat))

    @property
    def lat_bounds(self) -> tuple[float, float]:
        return (self.min_lat, self.max_lat)

    @property
    def lon_bounds(self) -> tuple[float, float]:
        return (self.min_lon, self.max_lon)

    def contains(self, lat: float, lon: float) -> bool:
        # covers() keeps points lying on the boundary
        return self.polygon.covers(Point(lon, lat))


def bounding_box(lat: float, lon: float, radius_degrees: float) -> BoundingBox:
    """Return the box spanning ``radius_degrees`` around (lat, lon) on each axis."""

    return BoundingBox(
        min_lat=round(lat - radius_degrees, BOUND_DECIMALS),
        max_lat=round(lat + radius_degrees, BOUND_DECIMALS),
        min_lon=round(lon - radius_degrees, BOUND_DECIMALS),
        max_lon=round(lon + radius_degrees, BOUND_DECIMALS),
    )
