"""Proximity check that stops near-identical points being created twice."""

from __future__ import annotations

from ..models.domain import DonationPoint
from ..persistence.base import DonationPointStore
from .geospatial import bounding_box, haversine_km

# About 100 m of latitude; applied separately to each axis.
SEARCH_RADIUS_DEGREES = 0.001


class DuplicateGuard:
    """Looks for an existing point inside a square box around new coordinates.

    The box ignores the active flag: an inactive point still blocks
    re-creation at the same place. The check and the later insert are two
    separate store calls, so concurrent submissions can both pass.
    """

    def __init__(self, store: DonationPointStore, radius_degrees: float = SEARCH_RADIUS_DEGREES):
        if radius_degrees <= 0:
            raise ValueError("radius_degrees must be positive")
        self.store = store
        self.radius_degrees = radius_degrees

    def find_conflict(self, latitude: float, longitude: float) -> DonationPoint | None:
        """Return any one point inside the box, or None when the area is free."""
        area = bounding_box(latitude, longitude, self.radius_degrees)
        matches = self.store.find_nearby(area.lat_bounds, area.lon_bounds, limit=1)
        return matches[0] if matches else None


def distance_meters(point: DonationPoint, latitude: float, longitude: float) -> float:
    return round(haversine_km(point.latitude, point.longitude, latitude, longitude) * 1000, 1)
