import logging
from typing import Any, List, Optional, Type

import httpx
from pydantic import BaseModel, Field

from juicecon_mcp.config import config
from juicecon_mcp.errors import PipelineError
from juicecon_mcp.models import Coordinates

logger = logging.getLogger("juicecon.nws")


# Upstream payloads, reduced to the fields we read


class _RelativeLocationProperties(BaseModel):
    city: str = ""
    state: str = ""


class _RelativeLocation(BaseModel):
    properties: _RelativeLocationProperties = Field(default_factory=_RelativeLocationProperties)


class _PointProperties(BaseModel):
    observation_stations: str = Field(..., alias="observationStations")
    relative_location: _RelativeLocation = Field(default_factory=_RelativeLocation, alias="relativeLocation")


class PointsPayload(BaseModel):
    properties: _PointProperties


class _StationProperties(BaseModel):
    station_identifier: str = Field(..., alias="stationIdentifier")


class _StationFeature(BaseModel):
    properties: _StationProperties


class StationsPayload(BaseModel):
    features: List[_StationFeature] = Field(default_factory=list)


class _Measurement(BaseModel):
    value: Optional[float] = None
    unit_code: str = Field("", alias="unitCode")


class _ObservationProperties(BaseModel):
    dewpoint: _Measurement = Field(default_factory=_Measurement)
    timestamp: str = ""


class ObservationPayload(BaseModel):
    properties: _ObservationProperties


class NWSClient:
    """Connection settings for the National Weather Service API.

    Holds only immutable configuration, so a single instance can serve any
    number of concurrent lookups. Each lookup opens its own session.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        accept: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or config.nws_base_url).rstrip("/")
        self.headers = {
            "User-Agent": user_agent or config.user_agent,
            "Accept": accept or config.accept,
        }
        self.timeout = timeout if timeout is not None else config.http_timeout
        self._transport = transport

    def session(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(headers=self.headers, timeout=self.timeout, transport=self._transport)

    def points_url(self, coords: Coordinates) -> str:
        return f"{self.base_url}/points/{coords.latitude:.4f},{coords.longitude:.4f}"

    def latest_observation_url(self, station_id: str) -> str:
        return f"{self.base_url}/stations/{station_id}/observations/latest"


async def fetch_json(client: httpx.AsyncClient, url: str, error: Type[PipelineError]) -> Any:
    """GET a JSON document, raising ``error`` for transport, status or decoding problems"""
    logger.debug(f"GET {url}")
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.error(f"{url} returned status {status}")
        raise error(f"API returned status {status}", status_code=status) from e
    except httpx.HTTPError as e:
        logger.error(f"Request to {url} failed: {e!r}")
        raise error(f"request failed: {e!r}") from e

    try:
        return response.json()
    except ValueError as e:
        raise error(f"failed to decode response: {str(e)}", status_code=response.status_code) from e
