"""Dynamic OpenGraph image endpoint."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from bpost_tracker.api.dependencies import ANY_METHOD, get_tracking_client
from bpost_tracker.models.tracking import TrackingQuery
from bpost_tracker.services.og_image import build_homepage_card, build_tracking_card
from bpost_tracker.services.tracking_client import TrackingClient, resolve_summary

router = APIRouter(tags=["preview"])

SVG_MEDIA_TYPE = "image/svg+xml"
TRACKING_CARD_CACHE = "public, max-age=60"
HOMEPAGE_CARD_CACHE = "public, max-age=86400"


@router.api_route("/og.svg", methods=ANY_METHOD)
async def og_image(
    request: Request,
    tracking_client: TrackingClient = Depends(get_tracking_client),
) -> Response:
    """
    Render the 1200x630 preview card.

    With both ``itemIdentifier`` and ``postalCode`` the card shows the live
    shipment status; otherwise the static homepage card is returned.
    """
    query = TrackingQuery.from_query_params(request.query_params)

    if query.is_present:
        summary = await resolve_summary(tracking_client, query)
        svg = build_tracking_card(query.item_identifier, summary)
    else:
        svg = build_homepage_card()

    # Shipment status changes, so only the static card is cached for long.
    cache_control = TRACKING_CARD_CACHE if query.item_identifier else HOMEPAGE_CARD_CACHE
    return Response(content=svg, media_type=SVG_MEDIA_TYPE, headers={"Cache-Control": cache_control})
