"""Exceptions raised by the donation point ingestion flow and stores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .models.domain import DonationPoint


@dataclass(slots=True, frozen=True)
class FieldError:
    path: tuple[str | int, ...]
    message: str
    code: str = "invalid"

    def as_dict(self) -> dict[str, Any]:
        return {"path": list(self.path), "message": self.message, "code": self.code}


class DonationPointError(Exception):
    """Base class for every error the core reports to callers."""


class ValidationError(DonationPointError):
    """The submission is malformed or incomplete. Nothing was written."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        fields = ", ".join(".".join(str(part) for part in error.path) for error in self.errors)
        super().__init__(f"Invalid donation point submission: {fields}")


class DuplicateConflict(DonationPointError):
    """A point already exists inside the duplicate search box."""

    def __init__(self, existing: DonationPoint, distance_meters: float | None = None):
        self.existing = existing
        self.distance_meters = distance_meters
        super().__init__(f"Donation point {existing.id} already exists near these coordinates")


class PersistenceError(DonationPointError):
    """The storage backend failed. The message is safe to show to callers."""
