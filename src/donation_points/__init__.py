"""Donation point locator backend."""

__version__ = "0.1.0"
