"""Shared API dependencies."""

from typing import AsyncIterator

import httpx
from fastapi import Depends, Request

from bpost_tracker.config import Settings
from bpost_tracker.services.assets import StaticAssetStore
from bpost_tracker.services.tracking_client import TrackingClient


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_asset_store(request: Request) -> StaticAssetStore:
    """Get the static asset store."""
    return request.app.state.assets


async def get_http_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    """Per-request HTTP client for the proxy. Redirects are relayed, never followed."""
    async with httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=False) as client:
        yield client


async def get_tracking_http_client(settings: Settings = Depends(get_settings)) -> AsyncIterator[httpx.AsyncClient]:
    """Per-request HTTP client for tracking lookups, which follows redirects."""
    async with httpx.AsyncClient(timeout=settings.http_timeout, follow_redirects=True) as client:
        yield client


def get_tracking_client(
    http_client: httpx.AsyncClient = Depends(get_tracking_http_client),
    settings: Settings = Depends(get_settings),
) -> TrackingClient:
    """Get tracking API client instance."""
    return TrackingClient(http_client, settings.tracking_endpoint)


# Routes match on path alone; handlers decide what each method gets.
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
