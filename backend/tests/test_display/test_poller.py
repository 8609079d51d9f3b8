from typing import Any, Dict

import httpx
import pytest

from rateboard.display.poller import ENDPOINTS, DisplayPoller
from rateboard.display.rotation import ROTATION_SLOT, RotationScheduler, ShowingRates
from rateboard.display.timers import VirtualTimers

BASE_URL = "http://board.local"

SETTINGS = {"show_media": True, "rates_display_duration_seconds": 15, "refresh_interval_seconds": 30}
MEDIA = [{"id": 1, "url": "/m.png", "duration_seconds": 30}]
PROMOS = [{"id": 1, "url": "/p.png", "duration_seconds": 5, "transition_effect": "zoom-in"}]
RATES = {"id": 1, "gold_24k_sale": 72500.0, "gold_24k_purchase": 71000.0}
BANNER = {"id": 1, "image_url": "/b.png", "height_px": 120}


def _responses() -> Dict[str, Any]:
    return {
        "/api/v1/rates/current": RATES,
        "/api/v1/settings/display": SETTINGS,
        "/api/v1/media/": MEDIA,
        "/api/v1/promo/": PROMOS,
        "/api/v1/banner/": BANNER,
    }


@pytest.fixture
def api(monkeypatch):
    """Route every AsyncClient through a MockTransport; tests edit `state` to script the server."""
    state: Dict[str, Any] = {"responses": _responses(), "down": set(), "requests": []}

    async def handler(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        path = request.url.path
        if path in state["down"]:
            return httpx.Response(503, json={"detail": "unavailable"})
        if path not in state["responses"]:
            return httpx.Response(404)
        return httpx.Response(200, json=state["responses"][path])

    transport = httpx.MockTransport(handler)
    orig_client = httpx.AsyncClient

    def _client(*args: Any, **kwargs: Any) -> httpx.AsyncClient:
        kwargs["transport"] = transport
        return orig_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", _client)
    return state


@pytest.fixture
def timers() -> VirtualTimers:
    return VirtualTimers()


@pytest.mark.asyncio
async def test_poll_once_fetches_every_resource(api, timers):
    rotation = RotationScheduler(timers)
    poller = DisplayPoller(BASE_URL + "/", rotation)

    data = await poller.poll_once()

    assert len(api["requests"]) == len(ENDPOINTS)
    assert {r.url.path for r in api["requests"]} == set(_responses())
    media_request = next(r for r in api["requests"] if r.url.path == "/api/v1/media/")
    assert media_request.url.params["active"] == "true"
    assert data.rates == RATES
    assert data.banner == BANNER
    assert data.failures == {}

    assert rotation.pending is False
    assert rotation.settings.refresh_interval_seconds == 30
    assert rotation.snapshot().promo.transition_effect == "zoom-in"
    assert timers.is_armed(ROTATION_SLOT)


@pytest.mark.asyncio
async def test_failed_fetch_keeps_previous_data(api, timers, caplog):
    rotation = RotationScheduler(timers)
    poller = DisplayPoller(BASE_URL, rotation)
    await poller.poll_once()

    api["down"] = {"/api/v1/settings/display", "/api/v1/rates/current"}
    api["responses"]["/api/v1/media/"] = []
    with caplog.at_level("WARNING"):
        data = await poller.poll_once()
        data = await poller.poll_once()

    assert data.get("settings") == SETTINGS
    assert data.rates == RATES
    assert data.failures == {"settings": 2, "rates": 2}
    assert "display_poll_failed" in caplog.text
    # The media playlist did refresh: emptied, so rotation stays on rates
    assert rotation.state == ShowingRates()
    assert rotation.snapshot().media is None

    api["down"] = set()
    data = await poller.poll_once()
    assert data.failures == {}


@pytest.mark.asyncio
async def test_unreachable_server_leaves_rotation_pending(monkeypatch, timers):
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = httpx.MockTransport(handler)
    orig_client = httpx.AsyncClient

    def _client(*args: Any, **kwargs: Any) -> httpx.AsyncClient:
        kwargs["transport"] = transport
        return orig_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", _client)

    rotation = RotationScheduler(timers)
    data = await DisplayPoller(BASE_URL, rotation).poll_once()

    assert data.payloads == {}
    assert set(data.failures) == set(ENDPOINTS)
    assert rotation.pending is True
    assert not timers.is_armed(ROTATION_SLOT)


@pytest.mark.asyncio
async def test_invalid_json_and_non_list_playlists_are_ignored(monkeypatch, timers):
    async def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/v1/settings/display":
            return httpx.Response(200, content=b"not json", headers={"content-type": "application/json"})
        if request.url.path == "/api/v1/media/":
            return httpx.Response(200, json={"items": MEDIA})
        return httpx.Response(200, json=None)

    transport = httpx.MockTransport(handler)
    orig_client = httpx.AsyncClient

    def _client(*args: Any, **kwargs: Any) -> httpx.AsyncClient:
        kwargs["transport"] = transport
        return orig_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", _client)

    rotation = RotationScheduler(timers)
    data = await DisplayPoller(BASE_URL, rotation).poll_once()

    assert "settings" in data.failures
    assert rotation.settings is None
    assert rotation.pending is True
