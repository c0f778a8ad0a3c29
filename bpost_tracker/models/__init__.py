"""Pydantic models."""

from bpost_tracker.models.tracking import (
    DEFAULT_STAGE,
    TrackingQuery,
    TrackingSummary,
)

__all__ = [
    "DEFAULT_STAGE",
    "TrackingQuery",
    "TrackingSummary",
]
