"""Tests for the CORS proxy endpoint."""

import gzip
import json

import httpx
import pytest
from fastapi.testclient import TestClient
from respx import MockRouter

from bpost_tracker.api.routes.proxy import origin_of, parse_target
from bpost_tracker.utils.exceptions import InvalidTargetError

TARGET = "https://track.bpost.cloud/track/items?itemIdentifier=123"


def _assert_json_error(response, status_code: int, message: str = None):
    assert response.status_code == status_code
    assert response.headers["content-type"] == "application/json"
    assert response.headers["access-control-allow-origin"] == "*"
    body = response.json()
    assert "error" in body
    if message is not None:
        assert body == {"error": message}


def test_missing_url_parameter(client: TestClient):
    _assert_json_error(client.get("/proxy"), 400, "Missing required ?url= parameter")
    _assert_json_error(client.get("/proxy?url="), 400, "Missing required ?url= parameter")


@pytest.mark.parametrize(
    "target",
    [
        "not a url",
        "/track/items",
        "track.bpost.cloud/track/items",
        "https://track.bpost.cloud:99999/track",
        "%E0%A4",
        "https://track.bpost.cloud/a%zz",
        "https://track.bpost.cloud/a%4",
    ],
)
def test_invalid_url(client: TestClient, target: str):
    _assert_json_error(client.get("/proxy", params={"url": target}), 400, "Invalid URL supplied")


def test_foreign_origin_is_forbidden(client: TestClient):
    """Scenario: proxying evil.example.com is refused with the allowed origin in the message."""
    response = client.get("/proxy?url=https%3A%2F%2Fevil.example.com%2Fx")

    _assert_json_error(response, 403, "Proxy only allowed for https://track.bpost.cloud")
    assert response.content == b'{"error":"Proxy only allowed for https://track.bpost.cloud"}'


@pytest.mark.parametrize(
    "target",
    [
        "http://track.bpost.cloud/track/items",
        "https://track.bpost.cloud.evil.example.com/track/items",
        "https://track.bpost.cloud:8443/track/items",
        "https://api.bpost.cloud/track/items",
    ],
)
def test_lookalike_origins_are_forbidden(client: TestClient, target: str):
    _assert_json_error(client.get("/proxy", params={"url": target}), 403)


@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "PATCH", "OPTIONS"])
def test_non_get_methods_are_rejected(client: TestClient, method: str):
    """Even allowed targets only accept GET."""
    response = client.request(method, "/proxy", params={"url": TARGET})

    _assert_json_error(response, 405, "Only GET requests are supported")


def test_validation_order_checks_origin_before_method(client: TestClient):
    response = client.post("/proxy", params={"url": "https://evil.example.com/x"})
    assert response.status_code == 403


def test_forwards_to_allowed_origin(client: TestClient, respx_mock: MockRouter):
    """Scenario: a GET is forwarded and relayed with CORS headers."""
    route = respx_mock.get(TARGET).mock(
        return_value=httpx.Response(
            200,
            json={"items": []},
            headers={
                "Access-Control-Allow-Origin": "https://track.bpost.cloud",
                "Access-Control-Allow-Methods": "GET",
                "Cache-Control": "public, max-age=300",
                "X-Upstream": "bpost",
            },
        )
    )

    response = client.get("/proxy?url=https%3A%2F%2Ftrack.bpost.cloud%2Ftrack%2Fitems%3FitemIdentifier%3D123")

    assert response.status_code == 200
    assert response.json() == {"items": []}
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"
    assert response.headers["cache-control"] == "no-store"
    assert response.headers["x-upstream"] == "bpost"
    assert response.headers.get_list("access-control-allow-origin") == ["*"]

    upstream_request = route.calls.last.request
    assert str(upstream_request.url) == TARGET
    assert upstream_request.headers["accept"] == "application/json"
    assert upstream_request.headers["user-agent"] == "BpostTracker/1.0"


def test_relays_upstream_status(client: TestClient, respx_mock: MockRouter):
    respx_mock.get(TARGET).mock(return_value=httpx.Response(404, json={"error": "not found"}))

    response = client.get("/proxy", params={"url": TARGET})

    assert response.status_code == 404
    assert response.json() == {"error": "not found"}
    assert response.headers["access-control-allow-origin"] == "*"


def test_relays_redirect_without_following(client: TestClient, respx_mock: MockRouter):
    """A redirect to another origin is passed back, not followed."""
    respx_mock.get(TARGET).mock(
        return_value=httpx.Response(302, headers={"Location": "https://evil.example.com/"})
    )

    response = client.get("/proxy", params={"url": TARGET}, follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "https://evil.example.com/"


def test_body_is_relayed_byte_exact(client: TestClient, respx_mock: MockRouter):
    """Encoded bodies are passed through with their content-encoding intact."""
    payload = {"items": [{"activeStep": {"label": {"main": {"EN": "Délivré"}}}}]}
    compressed = gzip.compress(json.dumps(payload).encode("utf-8"))
    respx_mock.get(TARGET).mock(
        return_value=httpx.Response(
            200,
            content=compressed,
            headers={"Content-Encoding": "gzip", "Content-Type": "application/json; charset=latin-1"},
        )
    )

    response = client.get("/proxy", params={"url": TARGET})

    assert response.status_code == 200
    assert response.headers["content-encoding"] == "gzip"
    assert response.headers["content-type"] == "application/json; charset=latin-1"
    assert response.headers["content-length"] == str(len(compressed))
    assert json.loads(response.content.decode("utf-8")) == payload


def test_upstream_unreachable(client: TestClient, respx_mock: MockRouter):
    respx_mock.get(TARGET).mock(side_effect=httpx.ConnectError("Connection refused"))

    response = client.get("/proxy", params={"url": TARGET})

    _assert_json_error(response, 502, "Failed to reach bpost API: Connection refused")


def test_parse_target_decodes_once_more():
    assert parse_target("https%3A%2F%2Ftrack.bpost.cloud%2Fx") == "https://track.bpost.cloud/x"
    with pytest.raises(InvalidTargetError):
        parse_target("mailto:")


def test_origin_of():
    assert origin_of("HTTPS://Track.Bpost.Cloud:443/a?b=c") == "https://track.bpost.cloud"
    assert origin_of("https://track.bpost.cloud:8443/") == "https://track.bpost.cloud:8443"
    assert origin_of("http://[::1]:8080/") == "http://[::1]:8080"


def test_forwards_the_validated_url(client: TestClient, respx_mock: MockRouter):
    """Surrounding whitespace is trimmed before the target is checked and sent."""
    route = respx_mock.get("https://track.bpost.cloud/x").mock(return_value=httpx.Response(200, json={}))

    response = client.get("/proxy", params={"url": " https://track.bpost.cloud/x\n"})

    assert response.status_code == 200
    assert str(route.calls.last.request.url) == "https://track.bpost.cloud/x"


def test_parse_target_rejects_malformed_escapes():
    with pytest.raises(InvalidTargetError):
        parse_target("https://track.bpost.cloud/a%zz")
    assert parse_target("https://track.bpost.cloud/a%2541") == "https://track.bpost.cloud/a%41"
