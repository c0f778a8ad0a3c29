"""Client for the upstream bpost tracking API."""

import logging
from typing import Any, Mapping, Optional

import httpx

from bpost_tracker.models.tracking import DEFAULT_STAGE, TrackingQuery, TrackingSummary
from bpost_tracker.utils.exceptions import UpstreamLookupError
from bpost_tracker.utils.result import Result
from bpost_tracker.utils.text import encode_component

logger = logging.getLogger(__name__)

PREFERRED_LANGUAGE = "EN"


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _first(value: Any) -> Optional[Any]:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def select_label(labels: Mapping[str, Any], default: str = "") -> str:
    """
    Pick a display label from a language-code mapping.

    The preferred language wins when it has a non-empty entry; otherwise the
    first entry in the mapping's insertion order is used, and ``default`` when
    that is empty too.
    """
    preferred = _text(labels.get(PREFERRED_LANGUAGE))
    if preferred:
        return preferred
    for value in labels.values():
        return _text(value) or default
    return default


def summary_from_item(item: Mapping[str, Any]) -> TrackingSummary:
    """Build a summary from one element of the upstream ``items`` array."""
    step = _mapping(item.get("activeStep"))
    main = _mapping(_mapping(step.get("label")).get("main"))
    stage = select_label(main, default=DEFAULT_STAGE)

    event = _mapping(_first(item.get("events")))
    latest_event = (
        _text(_mapping(event.get("description")).get(PREFERRED_LANGUAGE))
        or _text(_mapping(event.get("label")).get(PREFERRED_LANGUAGE))
        or _text(event.get("type"))
    )
    return TrackingSummary(stage=stage, latest_event=latest_event)


def parse_tracking_payload(payload: Any) -> Result[TrackingSummary, UpstreamLookupError]:
    """Turn a decoded upstream JSON body into a summary result."""
    item = _first(_mapping(payload).get("items"))
    if not isinstance(item, Mapping):
        return Result.err(UpstreamLookupError("Upstream response has no tracking items"))
    return Result.ok(summary_from_item(item))


class TrackingClient:
    """Looks up shipment status on the fixed upstream tracking API."""

    def __init__(self, http_client: httpx.AsyncClient, endpoint: str):
        """
        Args:
            http_client: Client used for the single outbound request
            endpoint: Absolute URL of the upstream items lookup
        """
        self.http_client = http_client
        self.endpoint = endpoint

    def build_url(self, query: TrackingQuery) -> str:
        return (
            f"{self.endpoint}"
            f"?itemIdentifier={encode_component(query.item_identifier)}"
            f"&postalCode={encode_component(query.postal_code)}"
        )

    async def fetch_summary(self, query: TrackingQuery) -> Result[TrackingSummary, UpstreamLookupError]:
        """
        Fetch the tracking summary for a shipment.

        Never raises: transport errors, error statuses and unusable bodies are
        returned as ``Result.err``.
        """
        url = self.build_url(query)
        try:
            response = await self.http_client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
            payload = response.json()
        except httpx.InvalidURL as e:
            return Result.err(UpstreamLookupError(f"Tracking URL rejected: {e}"))
        except httpx.HTTPError as e:
            return Result.err(UpstreamLookupError(f"Tracking request failed: {e}"))
        except ValueError as e:
            return Result.err(UpstreamLookupError(f"Tracking response is not valid JSON: {e}"))

        return parse_tracking_payload(payload)


async def resolve_summary(client: TrackingClient, query: TrackingQuery) -> TrackingSummary:
    """Fetch a summary, falling back to the default one when the lookup fails."""
    result = await client.fetch_summary(query)
    if result.is_err:
        logger.warning(
            "Tracking lookup failed, rendering default summary",
            extra={"item_identifier": query.item_identifier[:200], "reason": str(result.error)[:500]},
        )
    return result.unwrap_or(TrackingSummary())
