"""Tests for escaping and truncation helpers."""

import pytest

from bpost_tracker.utils.text import ELLIPSIS, encode_component, escape_attr, escape_xml, truncate


@pytest.mark.parametrize("value", ["", "short", "x" * 10])
def test_truncate_at_or_under_limit_is_unchanged(value: str):
    """Strings within the limit come back untouched."""
    assert truncate(value, 10) == value


@pytest.mark.parametrize("extra", [1, 2, 50])
def test_truncate_over_limit_is_exactly_limit(extra: int):
    """Longer strings are cut to exactly the limit, ending in an ellipsis."""
    result = truncate("a" * (10 + extra), 10)
    assert len(result) == 10
    assert result == "a" * 9 + ELLIPSIS


def test_escape_xml_removes_markup_characters():
    """No raw &, <, > or \" survive XML escaping."""
    escaped = escape_xml('<b class="x">Tom & Jerry</b>')
    assert escaped == "&lt;b class=&quot;x&quot;&gt;Tom &amp; Jerry&lt;/b&gt;"
    for char in '<>"':
        assert char not in escaped


def test_escape_xml_is_not_idempotent():
    """Escaping twice double-encodes, so callers must escape exactly once."""
    assert escape_xml(escape_xml("&")) == "&amp;amp;"


def test_escape_attr():
    """Attribute escaping covers ampersand and double quote."""
    assert escape_attr('say "hi" & bye') == "say &quot;hi&quot; &amp; bye"
    assert escape_attr("<kept>") == "<kept>"


def test_encode_component_matches_browser_encoding():
    """Percent-encoding keeps the encodeURIComponent safe set."""
    assert encode_component("AB 12/3?&=") == "AB%2012%2F3%3F%26%3D"
    assert encode_component("a-b_c.d!e~f*g'h(i)") == "a-b_c.d!e~f*g'h(i)"
    assert encode_component("é") == "%C3%A9"
