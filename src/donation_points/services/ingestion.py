"""Create and list donation points."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ..errors import DuplicateConflict, ValidationError
from ..models.domain import DonationPoint, DonationPointFilters
from ..persistence.base import DonationPointStore
from .duplicates import SEARCH_RADIUS_DEGREES, DuplicateGuard, distance_meters
from .validation import ValidationFailure, validate_submission


def create_donation_point(
    payload: Any,
    store: DonationPointStore,
    *,
    force: bool = False,
    radius_degrees: float = SEARCH_RADIUS_DEGREES,
) -> DonationPoint:
    """Validate, check for nearby points, and persist a new donation point.

    Args:
        payload: Raw decoded JSON body.
        store: Backend the point is written to.
        force: Skip the nearby-point check and always create.
        radius_degrees: Half-width of the duplicate search box.

    Raises:
        ValidationError: The payload is malformed. Nothing is written.
        DuplicateConflict: A point exists nearby and ``force`` is not set.
        PersistenceError: The store failed.
    """
    result = validate_submission(payload)
    if isinstance(result, ValidationFailure):
        raise ValidationError(list(result.errors))

    point = result.point
    guard = DuplicateGuard(store, radius_degrees=radius_degrees)
    if not force:
        existing = guard.find_conflict(point.latitude, point.longitude)
        if existing is not None:
            distance = distance_meters(existing, point.latitude, point.longitude)
            logging.warning(
                f"Refused '{point.name}' at ({point.latitude}, {point.longitude}): "
                f"point {existing.id} is {distance} m away"
            )
            raise DuplicateConflict(existing, distance_meters=distance)
    else:
        logging.info(f"Force-creating '{point.name}' at ({point.latitude}, {point.longitude})")

    created = store.create(point)
    logging.info(f"Created donation point {created.id} ({created.name}, {created.city})")
    return created


def parse_item_list(value: str | Iterable[str] | None) -> tuple[str, ...]:
    """Split a comma-separated item filter into upper-case tags."""
    if not value:
        return ()
    parts = value.split(",") if isinstance(value, str) else value
    items: list[str] = []
    for part in parts:
        code = part.strip().upper()
        if code and code not in items:
            items.append(code)
    return tuple(items)


def list_donation_points(
    store: DonationPointStore,
    *,
    autonomous_community: str | None = None,
    province: str | None = None,
    city: str | None = None,
    accepted_items: str | Iterable[str] | None = None,
) -> list[DonationPoint]:
    """Return active points matching every supplied filter, newest first."""
    filters = DonationPointFilters(
        autonomous_community=(autonomous_community or "").strip() or None,
        province=(province or "").strip() or None,
        city=(city or "").strip() or None,
        accepted_items=parse_item_list(accepted_items),
    )
    return store.find_many(filters)
