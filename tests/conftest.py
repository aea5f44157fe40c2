"""
Shared fixtures: a fake query service and a copy of the index.html template.
"""

import httpx
import pytest

from jaegerdev import events
from jaegerdev.config import BASE_DIR

TEMPLATE_PATH = BASE_DIR / "jaegerdev" / "templates" / "index.html"

UI_CONFIG = {"dependencies": {"menuEnabled": True}, "archiveEnabled": False}
CAPABILITIES = {"archiveStorage": True, "metricsStorage": False}
VERSION = {"gitCommit": "abc123", "gitVersion": "v1.60.0", "buildDate": "2026-01-01"}


def fake_backend(routes, calls=None):
    """MockTransport answering from a path -> Response/Exception/callable map. Unknown paths 404."""
    async def handler(request):
        if calls is not None:
            calls.append(request.url.path)
        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(404)
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return await route(request)
        # fresh Response per request, the same route may be hit more than once
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)
    return httpx.MockTransport(handler)


def unified_backend(calls=None):
    return fake_backend({
        "/api/ui/config": httpx.Response(200, json={
            "uiConfig": UI_CONFIG,
            "storageCapabilities": CAPABILITIES,
            "version": VERSION,
        }),
    }, calls)


def legacy_backend(calls=None):
    return fake_backend({
        "/api/config": httpx.Response(200, json=UI_CONFIG),
        "/api/capabilities": httpx.Response(200, json=CAPABILITIES),
        "/api/version": httpx.Response(200, json=VERSION),
    }, calls)


def dead_backend(calls=None):
    async def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)
    return fake_backend({
        "/api/ui/config": refuse,
        "/api/config": refuse,
        "/api/capabilities": refuse,
        "/api/version": refuse,
    }, calls)


@pytest.fixture
def template_html():
    return TEMPLATE_PATH.read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def clean_events():
    events.reset()
    yield
    events.reset()
