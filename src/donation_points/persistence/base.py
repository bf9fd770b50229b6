"""Contract shared by donation point storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models.domain import DonationPoint, DonationPointFilters, NewDonationPoint


class DonationPointStore(ABC):
    """Durable persistence and querying of donation points.

    Every method raises :class:`~donation_points.errors.PersistenceError`
    when the backend cannot complete the call.
    """

    name: str = "store"

    @abstractmethod
    def create(self, point: NewDonationPoint) -> DonationPoint:
        """Assign id and timestamps, persist, and return the stored point."""
        raise NotImplementedError

    @abstractmethod
    def find_many(self, filters: DonationPointFilters | None = None) -> list[DonationPoint]:
        """Return active points matching every supplied filter, newest first."""
        raise NotImplementedError

    @abstractmethod
    def find_nearby(
        self,
        lat_bounds: tuple[float, float],
        lon_bounds: tuple[float, float],
        limit: int = 1,
    ) -> list[DonationPoint]:
        """Return up to ``limit`` points inside the inclusive ranges, active or not."""
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> bool:
        """Return True when the backend answers a trivial query."""
        raise NotImplementedError
