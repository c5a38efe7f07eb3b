import logging
from datetime import datetime, timezone

import httpx
from pydantic import ValidationError

from juicecon_mcp.errors import (
    DewpointUnavailable,
    NoStationsAvailable,
    ObservationLookupFailed,
    StationLookupFailed,
)
from juicecon_mcp.models import ZERO_TIMESTAMP, LocationDescriptor, StationList
from juicecon_mcp.nws import NWSClient, ObservationPayload, StationsPayload, fetch_json

# Get logger for this module
logger = logging.getLogger("juicecon.station")

CELSIUS_UNIT_CODE = "wmoUnit:degC"


async def get_stations(client: httpx.AsyncClient, descriptor: LocationDescriptor) -> StationList:
    """Fetch the observation stations for a grid point, nearest first"""
    url = descriptor.observation_stations
    logger.info(f"Fetching observation stations from {url}")
    data = await fetch_json(client, url, StationLookupFailed)

    try:
        payload = StationsPayload.model_validate(data)
    except ValidationError as e:
        logger.error(f"Malformed stations response from {url}: {str(e)}")
        raise StationLookupFailed(f"failed to decode stations response: {str(e)}") from e

    stations = StationList(station_ids=[f.properties.station_identifier for f in payload.features])
    logger.debug(f"Stations found: {stations.station_ids}")
    return stations


async def find_nearest_station(client: httpx.AsyncClient, descriptor: LocationDescriptor) -> str:
    """Pick the first station of the provider's ranking.

    The upstream list is already ordered by distance, so no distance is
    computed here.
    """
    stations = await get_stations(client, descriptor)
    station_id = stations.nearest
    if station_id is None:
        logger.error(f"No observation stations listed at {descriptor.observation_stations}")
        raise NoStationsAvailable("no observation stations found")

    logger.info(f"Found nearest station: {station_id}")
    return station_id


async def get_latest_observation(client: httpx.AsyncClient, nws: NWSClient, station_id: str) -> ObservationPayload:
    """Fetch the latest observation of a station, failing when it has no dewpoint"""
    url = nws.latest_observation_url(station_id)
    logger.info(f"Requesting latest observation for station {station_id}")
    data = await fetch_json(client, url, ObservationLookupFailed)

    try:
        payload = ObservationPayload.model_validate(data)
    except ValidationError as e:
        logger.error(f"Malformed observation response from {url}: {str(e)}")
        raise ObservationLookupFailed(f"failed to decode observation response: {str(e)}") from e

    dewpoint = payload.properties.dewpoint
    if dewpoint.value is None:
        logger.warning(f"Station {station_id} reports no dewpoint")
        raise DewpointUnavailable("dewpoint data not available")
    if dewpoint.unit_code and dewpoint.unit_code != CELSIUS_UNIT_CODE:
        # Value is still read as Celsius
        logger.warning(f"Station {station_id} reports dewpoint in {dewpoint.unit_code}, treating it as Celsius")

    return payload


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, returning the zero instant when it cannot be read"""
    if not value:
        return ZERO_TIMESTAMP
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        # Offsets near the ends of the calendar overflow here
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        logger.warning(f"Could not parse observation timestamp {value!r}")
        return ZERO_TIMESTAMP
