"""Page endpoint: serves index.html with injected social-preview tags."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from bpost_tracker.api.dependencies import ANY_METHOD, get_asset_store, get_settings, get_tracking_client
from bpost_tracker.config import Settings
from bpost_tracker.models.tracking import TrackingQuery
from bpost_tracker.services.assets import StaticAssetStore
from bpost_tracker.services.og_meta import homepage_meta, inject_meta_tags, render_meta_tags, tracking_meta
from bpost_tracker.services.tracking_client import TrackingClient, resolve_summary

router = APIRouter(tags=["page"])

TRACKING_PAGE_CACHE = "no-store"
HOMEPAGE_CACHE = "public, max-age=3600"


def request_origin(request: Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc}"


async def render_page(
    request: Request,
    settings: Settings = Depends(get_settings),
    assets: StaticAssetStore = Depends(get_asset_store),
    tracking_client: TrackingClient = Depends(get_tracking_client),
) -> HTMLResponse:
    """
    Serve the single-page app with OpenGraph/Twitter tags for link previews.

    - **itemIdentifier** / **postalCode**: When both are given, the tags
      describe that shipment's current status
    """
    query = TrackingQuery.from_query_params(request.query_params)
    document = await assets.read_index()
    origin = request_origin(request)

    if query.is_present:
        summary = await resolve_summary(tracking_client, query)
        meta = tracking_meta(origin, str(request.url), query, summary)
    else:
        meta = homepage_meta(origin, settings.site_name)

    html = inject_meta_tags(document, render_meta_tags(meta, settings.site_name))
    cache_control = TRACKING_PAGE_CACHE if query.item_identifier else HOMEPAGE_CACHE
    return HTMLResponse(content=html, headers={"Cache-Control": cache_control})


router.add_api_route("/", render_page, methods=ANY_METHOD, response_class=HTMLResponse)
router.add_api_route("/index.html", render_page, methods=ANY_METHOD, response_class=HTMLResponse)
