"""Storage backends for donation points."""

from .base import DonationPointStore
from .database import SupabaseDonationPointStore
from .memory import InMemoryDonationPointStore

__all__ = ["DonationPointStore", "SupabaseDonationPointStore", "InMemoryDonationPointStore"]
