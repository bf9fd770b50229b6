"""Supabase persistence for donation points."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import TypeAdapter
from supabase import Client

from ..errors import PersistenceError
from ..models.domain import DonationPoint, DonationPointFilters, NewDonationPoint
from .base import DonationPointStore

_timestamp = TypeAdapter(datetime)


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    return _timestamp.validate_python(value)


def point_to_row(point: NewDonationPoint, point_id: str, now: datetime) -> dict[str, Any]:
    """Convert a validated submission into a ``donation_points`` table row."""
    return {
        "id": point_id,
        "name": point.name,
        "description": point.description,
        "address": point.address,
        "postal_code": point.postal_code,
        "city": point.city,
        "province": point.province,
        "autonomous_community": point.autonomous_community,
        "latitude": point.latitude,
        "longitude": point.longitude,
        "google_maps_url": point.google_maps_url,
        "phone": point.phone,
        "email": point.email,
        "website": point.website,
        "schedule": point.schedule,
        "accepted_items": list(point.accepted_items),
        "is_active": point.is_active,
        "created_at": now.isoformat(),
        "updated_at": now.isoformat(),
        "last_verification": now.isoformat(),
    }


def row_to_point(row: dict[str, Any]) -> DonationPoint:
    """Build a domain object from a table row returned by PostgREST."""
    return DonationPoint(
        id=str(row["id"]),
        name=row["name"],
        description=row.get("description"),
        address=row["address"],
        postal_code=row["postal_code"],
        city=row["city"],
        province=row["province"],
        autonomous_community=row["autonomous_community"],
        latitude=float(row["latitude"]),
        longitude=float(row["longitude"]),
        google_maps_url=row.get("google_maps_url"),
        phone=row.get("phone"),
        email=row.get("email"),
        website=row.get("website"),
        schedule=row.get("schedule"),
        accepted_items=tuple(row.get("accepted_items") or ()),
        is_active=bool(row.get("is_active", True)),
        created_at=_parse_timestamp(row["created_at"]),
        updated_at=_parse_timestamp(row["updated_at"]),
        last_verification=_parse_timestamp(row["last_verification"]),
        verified_at=_parse_timestamp(row.get("verified_at")),
    )


class SupabaseDonationPointStore(DonationPointStore):
    """Stores donation points in a Supabase (PostgREST) table."""

    name = "supabase"

    def __init__(self, client: Client, table: str = "donation_points"):
        self._client = client
        self._table = table

    def create(self, point: NewDonationPoint) -> DonationPoint:
        row = point_to_row(point, str(uuid.uuid4()), datetime.now(timezone.utc))
        try:
            response = self._client.table(self._table).insert(row).execute()
            if not response.data:
                raise PersistenceError("Insert returned no rows")
            return row_to_point(response.data[0])
        except PersistenceError:
            raise
        except Exception as e:
            logging.error(f"Failed to insert donation point '{point.name}': {e}")
            raise PersistenceError("Failed to save donation point") from e

    def find_many(self, filters: DonationPointFilters | None = None) -> list[DonationPoint]:
        filters = filters or DonationPointFilters()
        try:
            query = self._client.table(self._table).select("*").eq("is_active", True)
            if filters.autonomous_community:
                query = query.eq("autonomous_community", filters.autonomous_community)
            if filters.province:
                query = query.eq("province", filters.province)
            if filters.city:
                query = query.eq("city", filters.city)
            if filters.accepted_items:
                # array overlap: at least one requested item is accepted
                query = query.ov("accepted_items", list(filters.accepted_items))
            response = query.order("created_at", desc=True).execute()
            return [row_to_point(row) for row in (response.data or [])]
        except Exception as e:
            logging.error(f"Failed to query donation points: {e}")
            raise PersistenceError("Failed to load donation points") from e

    def find_nearby(
        self,
        lat_bounds: tuple[float, float],
        lon_bounds: tuple[float, float],
        limit: int = 1,
    ) -> list[DonationPoint]:
        try:
            response = (
                self._client.table(self._table)
                .select("*")
                .gte("latitude", lat_bounds[0])
                .lte("latitude", lat_bounds[1])
                .gte("longitude", lon_bounds[0])
                .lte("longitude", lon_bounds[1])
                .limit(limit)
                .execute()
            )
            return [row_to_point(row) for row in (response.data or [])]
        except Exception as e:
            logging.error(f"Failed to search nearby donation points: {e}")
            raise PersistenceError("Failed to check for nearby donation points") from e

    def ping(self) -> bool:
        try:
            self._client.table(self._table).select("id").limit(1).execute()
        except Exception as e:
            logging.warning(f"Supabase ping failed: {e}")
            return False
        return True
