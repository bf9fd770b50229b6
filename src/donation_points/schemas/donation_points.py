"""Pydantic request/response models for donation point endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..models.domain import AcceptedItem, DonationPoint, NewDonationPoint

REQUIRED_TEXT_FIELDS = ("name", "address", "postalCode", "city", "province", "autonomousCommunity")
OPTIONAL_TEXT_FIELDS = ("description", "phone", "email", "website", "schedule", "googleMapsUrl")

_http_url = TypeAdapter(HttpUrl)


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        raise ValueError("must be a valid http(s) URL") from None
    return value


class DonationPointSubmission(BaseModel):
    """Shape of a point submitted by the form, before it is stored."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    address: str = Field(..., min_length=1)
    postalCode: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    province: str = Field(..., min_length=1)
    autonomousCommunity: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)
    googleMapsUrl: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    schedule: Optional[str] = None
    acceptedItems: List[str] = Field(..., description="Item categories accepted at the point.")
    isActive: bool = True

    @field_validator(*REQUIRED_TEXT_FIELDS, mode="before")
    @classmethod
    def _strip_required(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator(*OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be a number")
        return value

    @field_validator("website", "googleMapsUrl")
    @classmethod
    def _validate_url(cls, value: Optional[str]) -> Optional[str]:
        return _check_url(value)

    @field_validator("acceptedItems")
    @classmethod
    def _normalize_items(cls, value: List[str]) -> List[str]:
        known = {item.value for item in AcceptedItem}
        normalized: list[str] = []
        unknown: list[str] = []
        for raw in value:
            code = raw.strip().upper()
            if code not in known:
                unknown.append(raw)
            elif code not in normalized:
                normalized.append(code)
        if unknown:
            raise ValueError(
                f"unknown item categories {unknown}; expected any of {sorted(known)}"
            )
        return normalized

    def to_new_point(self) -> NewDonationPoint:
        return NewDonationPoint(
            name=self.name,
            description=self.description,
            address=self.address,
            postal_code=self.postalCode,
            city=self.city,
            province=self.province,
            autonomous_community=self.autonomousCommunity,
            latitude=self.latitude,
            longitude=self.longitude,
            google_maps_url=self.googleMapsUrl,
            phone=self.phone,
            email=str(self.email) if self.email is not None else None,
            website=self.website,
            schedule=self.schedule,
            accepted_items=list(self.acceptedItems),
            is_active=self.isActive,
        )


class DonationPointModel(BaseModel):
    id: str
    name: str
    description: str | None = None
    address: str
    postalCode: str
    city: str
    province: str
    autonomousCommunity: str
    latitude: float
    longitude: float
    googleMapsUrl: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    schedule: str | None = None
    acceptedItems: List[str]
    isActive: bool
    createdAt: datetime
    updatedAt: datetime
    lastVerification: datetime
    verifiedAt: datetime | None = None

    @classmethod
    def from_domain(cls, point: DonationPoint) -> "DonationPointModel":
        return cls(
            id=point.id,
            name=point.name,
            description=point.description,
            address=point.address,
            postalCode=point.postal_code,
            city=point.city,
            province=point.province,
            autonomousCommunity=point.autonomous_community,
            latitude=point.latitude,
            longitude=point.longitude,
            googleMapsUrl=point.google_maps_url,
            phone=point.phone,
            email=point.email,
            website=point.website,
            schedule=point.schedule,
            acceptedItems=list(point.accepted_items),
            isActive=point.is_active,
            createdAt=point.created_at,
            updatedAt=point.updated_at,
            lastVerification=point.last_verification,
            verifiedAt=point.verified_at,
        )


class FieldErrorModel(BaseModel):
    path: List[str | int]
    message: str
    code: str


class DonationPointCreatedResponse(BaseModel):
    success: Literal[True] = True
    data: DonationPointModel


class DonationPointListResponse(BaseModel):
    success: Literal[True] = True
    locations: List[DonationPointModel]


class FailureResponse(BaseModel):
    success: Literal[False] = False
    error: str
    details: List[FieldErrorModel] | None = None
    nearbyLocation: DonationPointModel | None = None
    distanceMeters: float | None = None


class AcceptedItemModel(BaseModel):
    code: str
    label: str


class MapsLinkRequest(BaseModel):
    url: str = Field(..., min_length=1, description="Google Maps link to read coordinates from.")


class CoordinatesModel(BaseModel):
    latitude: float
    longitude: float


class CoordinatesResponse(BaseModel):
    success: Literal[True] = True
    data: CoordinatesModel
