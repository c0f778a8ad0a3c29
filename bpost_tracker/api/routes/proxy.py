"""CORS proxy endpoint, locked to the upstream tracking API origin."""

import logging
import re
from typing import Optional
from urllib.parse import unquote, urlsplit

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from bpost_tracker.api.dependencies import ANY_METHOD, get_http_client, get_settings
from bpost_tracker.config import Settings
from bpost_tracker.utils.exceptions import (
    InvalidTargetError,
    MethodNotAllowedError,
    MissingTargetError,
    OriginNotAllowedError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["proxy"])

DEFAULT_PORTS = {"http": 80, "https": 443}

# A "%" not starting a two-digit hex escape.
MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Stripped from both ends of the decoded target, as URL parsers do.
C0_CONTROL_OR_SPACE = "".join(chr(code) for code in range(0x21))

# Not forwarded: hop-by-hop headers, and content-length which is recomputed.
SKIPPED_RESPONSE_HEADERS = {
    b"connection",
    b"keep-alive",
    b"proxy-authenticate",
    b"proxy-authorization",
    b"te",
    b"trailer",
    b"transfer-encoding",
    b"upgrade",
    b"content-length",
}

CORS_OVERRIDES = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Cache-Control": "no-store",
}


def parse_target(raw: str) -> str:
    """
    Decode the proxy target and check it is an absolute URL.

    Args:
        raw: Value of the ``url`` query parameter

    Returns:
        The normalized target URL; this is the URL that gets checked and forwarded

    Raises:
        InvalidTargetError: If the value does not decode to an absolute URL
    """
    if MALFORMED_ESCAPE.search(raw):
        raise InvalidTargetError("Invalid URL supplied")

    try:
        decoded = unquote(raw, errors="strict").strip(C0_CONTROL_OR_SPACE)
        parts = urlsplit(decoded)
        _ = parts.port  # raises ValueError for a malformed port
    except ValueError as e:
        raise InvalidTargetError("Invalid URL supplied") from e

    if not parts.scheme or not parts.hostname:
        raise InvalidTargetError("Invalid URL supplied")
    return parts.geturl()


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` with the default port omitted."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"


def relay_response(upstream: httpx.Response, body: bytes) -> Response:
    """Copy status, headers and raw body from upstream, then apply the CORS overrides."""
    relayed = Response(content=body, status_code=upstream.status_code)
    relayed.raw_headers = [
        (name.lower(), value)
        for name, value in upstream.headers.raw
        if name.lower() not in SKIPPED_RESPONSE_HEADERS
    ]
    if upstream.status_code >= 200 and upstream.status_code not in (204, 304):
        relayed.headers["content-length"] = str(len(body))
    for name, value in CORS_OVERRIDES.items():
        relayed.headers[name] = value
    return relayed


@router.api_route("/proxy", methods=ANY_METHOD)
async def proxy(
    request: Request,
    url: Optional[str] = Query(None, description="Percent-encoded absolute URL on the allowed origin"),
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> Response:
    """
    Relay a GET request to the upstream tracking API with permissive CORS headers.

    - **url**: Target URL; its origin must be the configured allowed origin
    """
    if not url:
        raise MissingTargetError("Missing required ?url= parameter")

    target = parse_target(url)

    allowed_origin = settings.allowed_origin.rstrip("/")
    if origin_of(target) != allowed_origin:
        logger.warning("[PROXY] Rejected target outside allowed origin: %s", target[:200])
        raise OriginNotAllowedError(f"Proxy only allowed for {allowed_origin}")

    if request.method != "GET":
        raise MethodNotAllowedError("Only GET requests are supported")

    headers = {"Accept": "application/json", "User-Agent": settings.proxy_user_agent}
    try:
        async with http_client.stream("GET", target, headers=headers) as upstream:
            body = b"".join([chunk async for chunk in upstream.aiter_raw()])
    except httpx.InvalidURL as e:
        raise InvalidTargetError("Invalid URL supplied") from e
    except httpx.HTTPError as e:
        logger.error("[PROXY] Upstream unreachable: %s", e)
        raise UpstreamUnavailableError(f"Failed to reach bpost API: {e}") from e

    logger.info("[PROXY] %s -> %s (%d bytes)", target[:200], upstream.status_code, len(body))
    return relay_response(upstream, body)
