"""Donation point endpoints used by the map and the submission form."""

from __future__ import annotations

import json
from typing import Any, List

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from ...config import settings
from ...errors import DuplicateConflict, PersistenceError, ValidationError
from ...models.domain import AcceptedItem
from ...persistence.base import DonationPointStore
from ...schemas.donation_points import (
    AcceptedItemModel,
    CoordinatesModel,
    CoordinatesResponse,
    DonationPointCreatedResponse,
    DonationPointListResponse,
    DonationPointModel,
    FailureResponse,
    MapsLinkRequest,
)
from ...services.ingestion import create_donation_point, list_donation_points
from ...services.maps_links import extract_coordinates
from ..dependencies import get_store

router = APIRouter(prefix="/locations", tags=["locations"])

_FAILURES = {
    status.HTTP_400_BAD_REQUEST: {"model": FailureResponse},
    status.HTTP_409_CONFLICT: {"model": FailureResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": FailureResponse},
}
_TRUE_VALUES = {"true", "1", "yes"}


def _failure(status_code: int, error: str, **extra: Any) -> JSONResponse:
    body = FailureResponse(error=error, **extra)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", exclude_none=True))


async def _read_json(request: Request) -> tuple[Any, JSONResponse | None]:
    """Decode the request body, or build the failure envelope explaining why not."""
    raw_body = await request.body()
    if not raw_body.strip():
        return None, _failure(status.HTTP_400_BAD_REQUEST, "No data received")
    try:
        return json.loads(raw_body), None
    except ValueError:
        return None, _failure(status.HTTP_400_BAD_REQUEST, "Invalid JSON body")


@router.post(
    "",
    response_model=DonationPointCreatedResponse,
    status_code=status.HTTP_200_OK,
    responses=_FAILURES,
)
async def create_location(
    request: Request,
    force: str | None = Query(default=None, description="'true' creates the point even if one exists nearby"),
    store: DonationPointStore = Depends(get_store),
) -> DonationPointCreatedResponse | JSONResponse:
    payload, failure = await _read_json(request)
    if failure is not None:
        return failure

    try:
        point = await run_in_threadpool(
            create_donation_point,
            payload,
            store,
            force=(force or "").strip().lower() in _TRUE_VALUES,
            radius_degrees=settings.duplicate_search_radius_degrees,
        )
    except ValidationError as exc:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            "Invalid data",
            details=[error.as_dict() for error in exc.errors],
        )
    except DuplicateConflict as exc:
        return _failure(
            status.HTTP_409_CONFLICT,
            "A donation point already exists near these coordinates",
            nearbyLocation=DonationPointModel.from_domain(exc.existing),
            distanceMeters=exc.distance_meters,
        )
    except PersistenceError:
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create donation point")

    return DonationPointCreatedResponse(data=DonationPointModel.from_domain(point))


@router.get(
    "",
    response_model=DonationPointListResponse,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": FailureResponse}},
)
def list_locations(
    autonomousCommunity: str | None = Query(default=None, description="Exact autonomous community"),
    province: str | None = Query(default=None, description="Exact province"),
    city: str | None = Query(default=None, description="Exact city"),
    acceptedItems: str | None = Query(default=None, description="Comma-separated item categories (any of)"),
    store: DonationPointStore = Depends(get_store),
) -> DonationPointListResponse | JSONResponse:
    try:
        points = list_donation_points(
            store,
            autonomous_community=autonomousCommunity,
            province=province,
            city=city,
            accepted_items=acceptedItems,
        )
    except PersistenceError:
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to load donation points")
    return DonationPointListResponse(locations=[DonationPointModel.from_domain(point) for point in points])


@router.get("/accepted-items", response_model=List[AcceptedItemModel], status_code=status.HTTP_200_OK)
def list_accepted_items() -> List[AcceptedItemModel]:
    return [AcceptedItemModel(code=item.value, label=item.label) for item in AcceptedItem]


@router.post(
    "/coordinates",
    response_model=CoordinatesResponse,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_400_BAD_REQUEST: {"model": FailureResponse}},
)
async def resolve_coordinates(request: Request) -> CoordinatesResponse | JSONResponse:
    """Read latitude/longitude from a Google Maps link."""
    payload, failure = await _read_json(request)
    if failure is not None:
        return failure
    try:
        link = MapsLinkRequest.model_validate(payload)
    except PydanticValidationError as exc:
        return _failure(
            status.HTTP_400_BAD_REQUEST,
            "Invalid data",
            details=[
                {"path": list(error["loc"]), "message": error["msg"], "code": error["type"]}
                for error in exc.errors()
            ],
        )

    coordinates = extract_coordinates(link.url)
    if coordinates is None:
        return _failure(status.HTTP_400_BAD_REQUEST, "Could not extract coordinates from the URL")
    latitude, longitude = coordinates
    return CoordinatesResponse(data=CoordinatesModel(latitude=latitude, longitude=longitude))
