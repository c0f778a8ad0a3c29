"""String-safety helpers for generated markup."""

from urllib.parse import quote

ELLIPSIS = "…"


def truncate(value: str, limit: int) -> str:
    """
    Shorten ``value`` to at most ``limit`` characters.

    Longer strings keep their first ``limit - 1`` characters followed by a
    single ellipsis, so the result is exactly ``limit`` characters long.
    Length is counted on the raw string, before any escaping.
    """
    if len(value) > limit:
        return value[: limit - 1] + ELLIPSIS
    return value


def escape_attr(value: str) -> str:
    """Escape a value for a double-quoted HTML attribute."""
    return value.replace("&", "&amp;").replace('"', "&quot;")


def escape_xml(value: str) -> str:
    """Escape a value for an XML/SVG text node or attribute."""
    return (
        str(value)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def encode_component(value: str) -> str:
    """Percent-encode a query component the way browsers' encodeURIComponent does."""
    return quote(value, safe="-_.!~*'()")
