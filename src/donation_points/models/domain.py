"""Domain models for donation points."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class AcceptedItem(str, Enum):
    """Categories of goods a donation point may accept."""

    FOOD = "FOOD"
    CLOTHING = "CLOTHING"
    HYGIENE = "HYGIENE"
    CLEANING = "CLEANING"
    MEDICINE = "MEDICINE"
    TOOLS = "TOOLS"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        return ACCEPTED_ITEM_LABELS[self]


ACCEPTED_ITEM_LABELS: dict[AcceptedItem, str] = {
    AcceptedItem.FOOD: "Alimentos",
    AcceptedItem.CLOTHING: "Ropa",
    AcceptedItem.HYGIENE: "Productos de Higiene",
    AcceptedItem.CLEANING: "Productos de Limpieza",
    AcceptedItem.MEDICINE: "Medicamentos",
    AcceptedItem.TOOLS: "Herramientas",
    AcceptedItem.OTHER: "Otros",
}


@dataclass(slots=True)
class NewDonationPoint:
    """A validated submission that has not been stored yet."""

    name: str
    address: str
    postal_code: str
    city: str
    province: str
    autonomous_community: str
    latitude: float
    longitude: float
    accepted_items: list[str] = field(default_factory=list)
    description: Optional[str] = None
    google_maps_url: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    schedule: Optional[str] = None
    is_active: bool = True


@dataclass(slots=True, frozen=True)
class DonationPoint:
    """A stored donation point. The id never changes once assigned."""

    id: str
    name: str
    address: str
    postal_code: str
    city: str
    province: str
    autonomous_community: str
    latitude: float
    longitude: float
    accepted_items: tuple[str, ...]
    created_at: datetime
    updated_at: datetime
    last_verification: datetime
    description: Optional[str] = None
    google_maps_url: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    schedule: Optional[str] = None
    is_active: bool = True
    verified_at: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class DonationPointFilters:
    """Conjunction of optional filters applied by list queries."""

    autonomous_community: Optional[str] = None
    province: Optional[str] = None
    city: Optional[str] = None
    accepted_items: tuple[str, ...] = ()
