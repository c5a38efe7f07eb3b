from unittest.mock import AsyncMock

import httpx
import pytest

import payloads
from juicecon_mcp import server
from payloads import FakeNWS


@pytest.fixture
def ctx():
    return AsyncMock()


@pytest.fixture
def use_fake(monkeypatch, make_service):
    def _use(fake):
        monkeypatch.setattr(server, "weather_service", make_service(fake))
        return fake

    return _use


def _happy_fake(value=21.1):
    return FakeNWS(
        points=payloads.points(),
        stations=payloads.stations("KNYC"),
        observation=payloads.observation(value=value),
    )


@pytest.mark.asyncio
async def test_get_juicecon(use_fake, ctx):
    use_fake(_happy_fake())

    body = await server.get_juicecon(40.7128, -74.0060, ctx)

    assert body["level"] == 4
    assert body["levelDisplay"] == "JUICECON 4"
    assert body["location"]["station"] == "KNYC"
    assert body["timestamp"] == "2024-07-15T14:51:00Z"
    ctx.info.assert_awaited()


@pytest.mark.asyncio
async def test_get_juicecon_invalid_coordinates(use_fake, ctx):
    fake = use_fake(_happy_fake())

    body = await server.get_juicecon(123.0, -74.0, ctx)

    assert body["code"] == "INVALID_PARAMS"
    assert fake.calls == 0


@pytest.mark.asyncio
async def test_get_juicecon_pipeline_failure(use_fake, ctx):
    use_fake(FakeNWS(points=payloads.points(), stations=payloads.stations()))

    body = await server.get_juicecon(40.7128, -74.0060, ctx)

    assert body["code"] == "NO_STATIONS_AVAILABLE"
    assert body["error"].startswith("Unable to fetch weather data")
    ctx.error.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_juicecon_upstream_status(use_fake, ctx):
    use_fake(FakeNWS(points=httpx.Response(503)))

    body = await server.get_juicecon(40.7128, -74.0060, ctx)

    assert body["code"] == "LOCATION_LOOKUP_FAILED"
    assert "503" in body["error"]


@pytest.mark.asyncio
async def test_get_juicecon_by_zip(use_fake, ctx):
    fake = use_fake(_happy_fake(value=24.0))

    body = await server.get_juicecon_by_zip("10001", ctx)

    assert body["level"] == 1
    assert body["descriptor"] == "The Ultimate"
    assert fake.urls()[0] == "https://api.weather.gov/points/40.7506,-73.9972"


@pytest.mark.asyncio
async def test_get_juicecon_by_unknown_zip(use_fake, ctx):
    fake = use_fake(_happy_fake())

    body = await server.get_juicecon_by_zip("00000", ctx)

    assert body == {"error": "ZIP code not found: 00000", "code": "ZIP_NOT_FOUND"}
    assert fake.calls == 0


@pytest.mark.asyncio
async def test_get_juicecon_by_blank_zip(ctx):
    body = await server.get_juicecon_by_zip("  ", ctx)

    assert body["code"] == "INVALID_PARAMS"


def test_classify_dewpoint():
    assert server.classify_dewpoint(61.0) == {
        "level": 5,
        "levelDisplay": "JUICECON 5",
        "descriptor": "Noticeable",
        "description": "A/C at night is now justified.",
        "allClear": False,
    }
    assert server.classify_dewpoint(40.0)["allClear"] is True


def test_juicecon_briefing():
    report = {
        "level": 3,
        "levelDisplay": "JUICECON 3",
        "dewpoint": 71.24,
        "descriptor": "Unbearable",
        "description": "The air has weight. You are breathing soup.",
        "location": {"city": "New Orleans", "state": "LA", "station": "KMSY"},
        "timestamp": "2024-07-15T14:51:00Z",
        "allClear": False,
    }
    prompt = server.juicecon_briefing(report)

    assert "New Orleans, LA (station KMSY)" in prompt
    assert "JUICECON 3 - Unbearable" in prompt
    assert "71.2°F" in prompt


@pytest.mark.asyncio
async def test_get_juicecon_timestamp_outside_utc_range(use_fake, ctx):
    use_fake(
        FakeNWS(
            points=payloads.points(),
            stations=payloads.stations("KNYC"),
            observation=payloads.observation(timestamp="0001-01-01T02:00:00+05:00"),
        )
    )

    body = await server.get_juicecon(40.7128, -74.0060, ctx)

    assert body["timestamp"] == "0001-01-01T00:00:00Z"
    assert body["descriptor"] == "Miserable"
