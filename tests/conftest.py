import os
import tempfile

# Keep the server's log file out of the working tree
os.environ.setdefault("JUICECON_LOG_DIR", tempfile.mkdtemp(prefix="juicecon-logs-"))

import httpx  # noqa: E402
import pytest  # noqa: E402

from juicecon_mcp.models import Coordinates  # noqa: E402
from juicecon_mcp.nws import NWSClient  # noqa: E402
from juicecon_mcp.weather import WeatherService  # noqa: E402
from payloads import BASE_URL  # noqa: E402


@pytest.fixture
def new_york():
    return Coordinates(latitude=40.7128, longitude=-74.0060)


@pytest.fixture
def make_service():
    """Build a WeatherService whose HTTP calls are answered by a FakeNWS"""

    def _make(fake) -> WeatherService:
        nws = NWSClient(base_url=BASE_URL, timeout=10.0, transport=httpx.MockTransport(fake))
        return WeatherService(nws)

    return _make
