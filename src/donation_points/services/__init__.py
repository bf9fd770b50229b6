"""Donation point services."""
