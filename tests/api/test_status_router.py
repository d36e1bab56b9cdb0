import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tailview.api.routers import info, status
from tailview.status.models import InterfaceInfo, PeerStatus, PeerSummary, StatusView
from tailview.status.poller import StatusPoller

STATUS = StatusView(
    interface_info=InterfaceInfo(name="tailscale0", rx_bytes="2 MB", tx_bytes="1 MB", mtu="1280", ipv4="100.80.52.1"),
    peer_status=PeerStatus(peers=[PeerSummary(hostname="node1", ip="100.1.2.3", online=True, rx_bytes="2 MB")]),
)


def _client(view=None, latest=None):
    app = FastAPI()
    app.include_router(info.router)
    app.include_router(status.router)
    app.state.view = view
    if latest is not None:
        app.state.poller = StatusPoller(view)
        app.state.poller.latest = latest
    return TestClient(app)


def _view(result):
    return SimpleNamespace(load=AsyncMock(return_value=result))


def test_get_status_loads_when_no_poller():
    view = _view(STATUS)
    response = _client(view=view).get("/status")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["data"]["interface_info"]["ipv4"] == "100.80.52.1"
    assert body["data"]["peer_status"]["peers"][0]["hostname"] == "node1"
    view.load.assert_awaited_once()


def test_get_status_prefers_polled_result():
    view = _view(StatusView(peer_status=PeerStatus(error="stale")))
    response = _client(view=view, latest=STATUS).get("/status")

    assert response.json()["data"]["peer_status"]["error"] is None
    view.load.assert_not_awaited()


def test_get_interface_absent():
    view = _view(StatusView(peer_status=PeerStatus()))
    body = _client(view=view).get("/status/interface").json()

    assert body["data"] is None
    assert body["message"] == "No interface online."


def test_get_peers_error_is_not_http_error():
    view = _view(StatusView(peer_status=PeerStatus(error="Tailscale is not running.")))
    response = _client(view=view).get("/status/peers")

    assert response.status_code == 200
    assert response.json()["data"]["error"] == "Tailscale is not running."


def test_get_status_page_html():
    response = _client(view=_view(STATUS)).get("/status/view")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Network Interface Information" in response.text
    assert "node1" in response.text


def test_unexpected_error_returns_500():
    view = SimpleNamespace(load=AsyncMock(side_effect=RuntimeError("boom")))
    response = _client(view=view).get("/status")

    assert response.status_code == 500
    assert response.json()["detail"] == "boom"


def test_version_endpoint(monkeypatch):
    monkeypatch.setattr("tailview.version.get_version", lambda: "1.2.3")
    response = _client().get("/info/version")

    assert response.status_code == 200
    assert response.json()["data"]["version"] == "1.2.3"


def test_app_lifespan_starts_and_stops_poller():
    with patch("tailview.api.server.StatusPoller") as MockPoller:
        from tailview.api.server import app
        with TestClient(app):
            MockPoller.return_value.start.assert_called_once()
        MockPoller.return_value.stop.assert_called_once()


@pytest.mark.asyncio
async def test_concurrent_requests_share_one_load():
    async def slow_load():
        await asyncio.sleep(0.05)
        return STATUS

    view = SimpleNamespace(load=AsyncMock(side_effect=slow_load))
    request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(view=view)))

    results = await asyncio.gather(*[status.current_status(request) for _ in range(10)])

    assert view.load.await_count == 1
    assert all(result == STATUS for result in results)
    assert isinstance(request.app.state.poller, StatusPoller)
