from __future__ import annotations

import asyncio

import pytest
from aiohttp import ClientConnectionError

from app.services.device_client import ApiError, DeviceClient, TransportError
from tests.utils.fakes import FakeResponse, FakeSession

BASE = "http://10.0.0.5"


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def api(session) -> DeviceClient:
    return DeviceClient(f"{BASE}/", session=session, timeout=2.0)


@pytest.mark.unit
async def test_get_status_parses_json(api, session):
    session.queue_response(FakeResponse(200, '{"temp": 21.5, "state": "IDLE"}'))
    assert await api.get_status() == {"temp": 21.5, "state": "IDLE"}
    assert session.requests == [("GET", f"{BASE}/status", None)]


@pytest.mark.unit
async def test_get_status_non_success_is_api_error(api, session):
    session.queue_response(FakeResponse(503, "busy"))
    with pytest.raises(ApiError) as exc:
        await api.get_status()
    assert str(exc.value) == "HTTP 503"
    assert exc.value.status == 503


@pytest.mark.unit
async def test_get_config_bad_json_is_api_error(api, session):
    session.queue_response(FakeResponse(200, "<html>"))
    with pytest.raises(ApiError):
        await api.get_config()
    assert session.requests[0][1] == f"{BASE}/config"


@pytest.mark.unit
async def test_get_status_rejects_non_object(api, session):
    session.queue_response(FakeResponse(200, "[1, 2]"))
    with pytest.raises(ApiError):
        await api.get_status()


@pytest.mark.unit
async def test_start_returns_body(api, session):
    session.queue_response(FakeResponse(200, "started"))
    assert await api.start() == "started"
    assert session.requests == [("GET", f"{BASE}/start", None)]


@pytest.mark.unit
@pytest.mark.parametrize(
    "body, message", [("pump busy", "pump busy"), ("", "HTTP 500")]
)
async def test_command_failure_uses_body_or_status(api, session, body, message):
    session.queue_response(FakeResponse(500, body))
    with pytest.raises(ApiError) as exc:
        await api.stop()
    assert str(exc.value) == message
    assert exc.value.status == 500


@pytest.mark.unit
async def test_command_failure_with_undecodable_body_is_api_error(api, session):
    session.queue_response(FakeResponse(500, b"\xff\xfe pump jammed"))
    with pytest.raises(ApiError) as exc:
        await api.start()
    assert "pump jammed" in str(exc.value)
    assert exc.value.status == 500


@pytest.mark.unit
async def test_status_with_undecodable_body_is_api_error(api, session):
    session.queue_response(FakeResponse(200, b'{"state": "\xff"'))
    with pytest.raises(ApiError):
        await api.get_status()


@pytest.mark.unit
async def test_set_time_posts_json(api, session):
    session.queue_response(FakeResponse(200, "OK"))
    await api.set_time("2024-05-01T10:00:00")
    assert session.requests == [
        ("POST", f"{BASE}/config/time", {"time": "2024-05-01T10:00:00"})
    ]


@pytest.mark.unit
@pytest.mark.parametrize(
    "error", [ClientConnectionError("Cannot connect to host"), asyncio.TimeoutError()]
)
async def test_transport_errors_are_wrapped(api, session, error):
    session.queue_response(error)
    with pytest.raises(TransportError):
        await api.get_status()


@pytest.mark.unit
async def test_close_leaves_injected_session_open(api, session):
    await api.close()
    assert session.closed is False
