"""Social-preview metadata for the page route."""

from dataclasses import dataclass

from bpost_tracker.models.tracking import TrackingQuery, TrackingSummary
from bpost_tracker.services.og_image import CARD_HEIGHT, CARD_WIDTH
from bpost_tracker.utils.text import encode_component, escape_attr

HEAD_CLOSE = "</head>"
OG_IMAGE_PATH = "/og.svg"
DESCRIPTION_SEPARATOR = " · "

HOMEPAGE_DESCRIPTION = (
    "A lightweight, open-source bpost shipment tracker. Powered by the official bpost tracking API. "
    "No ads, no login — just paste your tracking number and go. Built as a single-page app with "
    "Tailwind CSS, Leaflet maps and a small CORS proxy."
)


@dataclass(frozen=True)
class PageMeta:
    """Unescaped values for the social-preview tags."""

    title: str
    description: str
    image_url: str
    page_url: str


def homepage_meta(origin: str, site_name: str) -> PageMeta:
    return PageMeta(
        title=site_name,
        description=HOMEPAGE_DESCRIPTION,
        image_url=f"{origin}{OG_IMAGE_PATH}",
        page_url=origin,
    )


def tracking_meta(origin: str, page_url: str, query: TrackingQuery, summary: TrackingSummary) -> PageMeta:
    """Metadata for a shared shipment; the title is the raw tracking number."""
    image_url = (
        f"{origin}{OG_IMAGE_PATH}"
        f"?itemIdentifier={encode_component(query.item_identifier)}"
        f"&postalCode={encode_component(query.postal_code)}"
    )
    description = DESCRIPTION_SEPARATOR.join(
        part for part in (summary.stage, summary.latest_event) if part
    )
    return PageMeta(
        title=query.item_identifier,
        description=description,
        image_url=image_url,
        page_url=page_url,
    )


def render_meta_tags(meta: PageMeta, site_name: str) -> str:
    """Render the OpenGraph and Twitter tag block; every value is attribute-escaped."""
    title = escape_attr(meta.title)
    description = escape_attr(meta.description)
    image_url = escape_attr(meta.image_url)
    page_url = escape_attr(meta.page_url)
    return f"""<!-- OpenGraph / Social -->
  <meta property="og:type"         content="website">
  <meta property="og:site_name"    content="{escape_attr(site_name)}">
  <meta property="og:url"          content="{page_url}">
  <meta property="og:title"        content="{title}">
  <meta property="og:description"  content="{description}">
  <meta property="og:image"        content="{image_url}">
  <meta property="og:image:width"  content="{CARD_WIDTH}">
  <meta property="og:image:height" content="{CARD_HEIGHT}">
  <!-- Twitter / X -->
  <meta name="twitter:card"        content="summary_large_image">
  <meta name="twitter:title"       content="{title}">
  <meta name="twitter:description" content="{description}">
  <meta name="twitter:image"       content="{image_url}">"""


def inject_meta_tags(document: str, tags: str) -> str:
    """Insert ``tags`` before the first closing head marker; later markers are left alone."""
    return document.replace(HEAD_CLOSE, f"{tags}\n{HEAD_CLOSE}", 1)
