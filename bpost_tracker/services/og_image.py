"""OpenGraph card rendering (SVG, 1200x630)."""

from typing import Optional, Sequence, Tuple

from bpost_tracker.models.tracking import TrackingSummary
from bpost_tracker.utils.text import escape_xml, truncate

CARD_WIDTH = 1200
CARD_HEIGHT = 630

IDENTIFIER_LIMIT = 36
STAGE_LIMIT = 40
EVENT_LIMIT = 55
EMPTY_EVENT_PLACEHOLDER = "—"

BRAND_RED = "#e3000f"
BRAND_RED_TINT = "#ffeaeb"
INK = "#0f172a"
MUTED = "#94a3b8"
BODY = "#475569"
RULE = "#e2e8f0"
PAPER = "#f8fafc"
PILL = "#f1f5f9"

SANS = "ui-sans-serif,system-ui,sans-serif"
MONO = "ui-monospace,monospace"

# (label, width, highlighted)
FEATURE_PILLS: Tuple[Tuple[str, int, bool], ...] = (
    ("Live status", 136, True),
    ("Leaflet Maps", 144, False),
    ("Open Source", 136, False),
)
PILL_GAP = 16


def _text(x: float, y: float, content: str, size: int, fill: str, weight: Optional[int] = None,
          family: str = SANS, anchor: Optional[str] = None, extra: str = "") -> str:
    """Render a <text> element; ``content`` must already be escaped."""
    attrs = [f'x="{x}"', f'y="{y}"', f'font-family="{family}"', f'font-size="{size}"']
    if weight is not None:
        attrs.append(f'font-weight="{weight}"')
    if extra:
        attrs.append(extra)
    attrs.append(f'fill="{fill}"')
    if anchor:
        attrs.append(f'text-anchor="{anchor}"')
    return f"<text {' '.join(attrs)}>{content}</text>"


def _rule(x1: int, y1: int, x2: int, y2: int, width: float = 1.5) -> str:
    return f'<line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" stroke="{RULE}" stroke-width="{width}"/>'


def _caption(y: int, label: str) -> str:
    return _text(520, y, label, 16, MUTED, weight=700, extra='letter-spacing="4"')


def logo_mark(cx: int, cy: int) -> str:
    """Red rounded tile with a parcel outline, centered on (cx, cy)."""
    return f"""
    <rect x="{cx - 36}" y="{cy - 36}" width="72" height="72" rx="18" fill="{BRAND_RED}"/>
    <g transform="translate({cx - 18}, {cy - 18}) scale(1.5)" stroke="#ffffff" stroke-width="2" stroke-linecap="round" stroke-linejoin="round" fill="none">
      <path d="M21 16V8a2 2 0 0 0-1-1.73l-7-4a2 2 0 0 0-2 0l-7 4A2 2 0 0 0 3 8v8a2 2 0 0 0 1 1.73l7 4a2 2 0 0 0 2 0l7-4A2 2 0 0 0 21 16z"/>
      <polyline points="3.27 6.96 12 12.01 20.73 6.96"/>
      <line x1="12" y1="22.08" x2="12" y2="12"/>
    </g>"""


def _frame() -> str:
    return (
        f'<rect width="{CARD_WIDTH}" height="{CARD_HEIGHT}" fill="{PAPER}"/>\n'
        f'  <rect width="8" height="{CARD_HEIGHT}" fill="{BRAND_RED}"/>\n'
        f"  {_rule(460, 100, 460, 530, width=2)}"
    )


def _wordmark(cy: int, size: int, spacing: int) -> str:
    return (
        f"{_text(230, cy, 'bpost', size, INK, weight=700, anchor='middle')}\n"
        f"  {_text(230, cy + spacing, 'tracker', size, MUTED, weight=300, anchor='middle')}"
    )


def _pills(pills: Sequence[Tuple[str, int, bool]], x: int, y: int) -> str:
    parts = []
    for label, width, highlighted in pills:
        fill, ink = (BRAND_RED_TINT, BRAND_RED) if highlighted else (PILL, BODY)
        parts.append(f'<rect x="{x}" y="{y}" width="{width}" height="40" rx="20" fill="{fill}"/>')
        parts.append(_text(x + width // 2, y + 26, escape_xml(label), 17, ink, weight=600, anchor="middle"))
        x += width + PILL_GAP
    return "\n  ".join(parts)


def _document(body: str) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{CARD_WIDTH}" height="{CARD_HEIGHT}" '
        f'viewBox="0 0 {CARD_WIDTH} {CARD_HEIGHT}">\n'
        f"  {body}\n"
        f"</svg>"
    )


def build_homepage_card() -> str:
    """Static marketing card used when no shipment is being shared."""
    body = f"""{_frame()}
  {logo_mark(230, 270)}
  {_wordmark(370, 28, 34)}

  {_text(520, 210, "A lightweight bpost", 46, INK, weight=800)}
  {_text(520, 268, "shipment tracker.", 46, BRAND_RED, weight=800)}

  {_rule(520, 296, 1140, 296)}

  {_text(520, 350, "Powered by the official bpost API · No login required", 24, BODY)}
  {_text(520, 390, "Single-page app, works instantly from any browser", 24, BODY)}

  {_rule(520, 420, 1140, 420)}

  {_pills(FEATURE_PILLS, 520, 444)}"""
    return _document(body)


def build_tracking_card(item_identifier: str, summary: TrackingSummary) -> str:
    """
    Card for a shared shipment.

    Each dynamic value is truncated on its raw characters first and escaped
    exactly once afterwards.
    """
    safe_id = escape_xml(truncate(item_identifier, IDENTIFIER_LIMIT))
    safe_stage = escape_xml(truncate(summary.stage, STAGE_LIMIT))
    safe_event = escape_xml(truncate(summary.latest_event, EVENT_LIMIT))

    body = f"""{_frame()}
  {logo_mark(230, 240)}
  {_wordmark(336, 22, 28)}

  {_caption(188, "TRACKING NUMBER")}
  {_text(520, 248, safe_id, 44, INK, weight=800, family=MONO)}

  {_rule(520, 272, 1140, 272)}

  {_caption(320, "CURRENT STAGE")}
  <rect x="518" y="332" width="620" height="56" rx="12" fill="{BRAND_RED_TINT}"/>
  {_text(540, 370, safe_stage, 30, BRAND_RED, weight=700)}

  {_rule(520, 408, 1140, 408)}

  {_caption(450, "LATEST UPDATE")}
  {_text(520, 502, safe_event or EMPTY_EVENT_PLACEHOLDER, 30, BODY)}"""
    return _document(body)
