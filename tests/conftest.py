"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from bpost_tracker.config import Settings
from bpost_tracker.main import create_app

INDEX_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>bpost tracker</title>
</head>
<body><div id="app"></div></body>
</html>
"""

TRACKING_API = "https://track.bpost.cloud/track/items"


@pytest.fixture
def static_dir(tmp_path):
    """Static asset tree with the base document and one extra asset."""
    (tmp_path / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (tmp_path / "app.js").write_text("console.log('tracker');", encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(static_dir):
    """Settings pointing at the temporary static tree."""
    return Settings(static_dir=static_dir, log_level="WARNING")


@pytest.fixture
def client(settings):
    """Create test client."""
    return TestClient(create_app(settings))


@pytest.fixture
def tracking_payload():
    """Upstream response for a shipment out for delivery."""
    return {
        "items": [
            {
                "activeStep": {
                    "label": {
                        "main": {
                            "NL": "Onderweg",
                            "EN": "Out for delivery",
                            "FR": "En cours de livraison",
                        }
                    }
                },
                "events": [
                    {
                        "description": {"EN": "Parcel is with the mail carrier", "NL": "Pakje is bij de postbode"},
                        "label": {"EN": "Out for delivery"},
                        "type": "OUT_FOR_DELIVERY",
                    },
                    {
                        "description": {"EN": "Parcel sorted"},
                        "type": "SORTED",
                    },
                ],
            }
        ]
    }
