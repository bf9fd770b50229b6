"""In-process donation point store for development and tests."""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone

from ..models.domain import DonationPoint, DonationPointFilters, NewDonationPoint
from ..services.geospatial import BoundingBox
from .base import DonationPointStore


class InMemoryDonationPointStore(DonationPointStore):
    """Keeps points in a list. Contents are lost when the process exits."""

    name = "memory"

    def __init__(self, points: list[DonationPoint] | None = None):
        self._points: list[DonationPoint] = list(points or [])
        self._lock = threading.Lock()

    def create(self, point: NewDonationPoint) -> DonationPoint:
        now = datetime.now(timezone.utc)
        stored = DonationPoint(
            id=str(uuid.uuid4()),
            name=point.name,
            description=point.description,
            address=point.address,
            postal_code=point.postal_code,
            city=point.city,
            province=point.province,
            autonomous_community=point.autonomous_community,
            latitude=point.latitude,
            longitude=point.longitude,
            google_maps_url=point.google_maps_url,
            phone=point.phone,
            email=point.email,
            website=point.website,
            schedule=point.schedule,
            accepted_items=tuple(point.accepted_items),
            is_active=point.is_active,
            created_at=now,
            updated_at=now,
            last_verification=now,
        )
        with self._lock:
            self._points.append(stored)
        return stored

    def find_many(self, filters: DonationPointFilters | None = None) -> list[DonationPoint]:
        filters = filters or DonationPointFilters()
        wanted = set(filters.accepted_items)
        with self._lock:
            snapshot = list(self._points)

        matches = [
            point
            for point in snapshot
            if point.is_active
            and (not filters.autonomous_community or point.autonomous_community == filters.autonomous_community)
            and (not filters.province or point.province == filters.province)
            and (not filters.city or point.city == filters.city)
            and (not wanted or wanted.intersection(point.accepted_items))
        ]
        # later inserts win ties on equal timestamps
        return sorted(reversed(matches), key=lambda point: point.created_at, reverse=True)

    def find_nearby(
        self,
        lat_bounds: tuple[float, float],
        lon_bounds: tuple[float, float],
        limit: int = 1,
    ) -> list[DonationPoint]:
        area = BoundingBox(
            min_lat=lat_bounds[0],
            max_lat=lat_bounds[1],
            min_lon=lon_bounds[0],
            max_lon=lon_bounds[1],
        )
        with self._lock:
            snapshot = list(self._points)
        return [point for point in snapshot if area.contains(point.latitude, point.longitude)][:limit]

    def ping(self) -> bool:
        return True
