"""Tracking data models."""

from pydantic import BaseModel, ConfigDict, Field
from starlette.datastructures import QueryParams

DEFAULT_STAGE = "In progress"


class TrackingQuery(BaseModel):
    """Shipment lookup parameters taken from the request query string."""

    model_config = ConfigDict(frozen=True)

    item_identifier: str = Field(default="", description="Tracking number, forwarded verbatim")
    postal_code: str = Field(default="", description="Destination postal code, forwarded verbatim")

    @classmethod
    def from_query_params(cls, params: QueryParams) -> "TrackingQuery":
        """Build from the query string; a repeated parameter keeps its first value."""
        return cls(
            item_identifier=(params.getlist("itemIdentifier") or [""])[0],
            postal_code=(params.getlist("postalCode") or [""])[0],
        )

    @property
    def is_present(self) -> bool:
        """Both identifiers are needed before the upstream API is asked."""
        return bool(self.item_identifier and self.postal_code)


class TrackingSummary(BaseModel):
    """Display summary of a shipment's current status."""

    model_config = ConfigDict(frozen=True)

    stage: str = DEFAULT_STAGE
    latest_event: str = ""
