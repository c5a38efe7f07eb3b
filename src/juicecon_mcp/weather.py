import logging
from datetime import datetime, timezone
from typing import Optional

from juicecon_mcp.juicecon import classify
from juicecon_mcp.location import get_location
from juicecon_mcp.models import (
    Coordinates,
    JuiceconReport,
    LevelSummary,
    Observation,
    ReportLocation,
    SeverityLevel,
)
from juicecon_mcp.nws import NWSClient
from juicecon_mcp.station import find_nearest_station, get_latest_observation, parse_timestamp

logger = logging.getLogger("juicecon.weather")


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def format_timestamp(timestamp: datetime) -> str:
    """Render a timestamp as UTC with a trailing Z"""
    utc = timestamp.astimezone(timezone.utc) if timestamp.tzinfo else timestamp
    return utc.replace(tzinfo=None).isoformat(timespec="seconds") + "Z"


def build_report(observation: Observation, level: SeverityLevel) -> JuiceconReport:
    return JuiceconReport(
        **LevelSummary.from_level(level).model_dump(),
        dewpoint=observation.dewpoint_f,
        location=ReportLocation(city=observation.city, state=observation.state, station=observation.station),
        timestamp=format_timestamp(observation.timestamp),
    )


class WeatherService:
    """Service for resolving coordinates to the nearest station's current dewpoint"""

    def __init__(self, nws: Optional[NWSClient] = None):
        self.nws = nws or NWSClient()

    async def resolve(self, coords: Coordinates) -> Observation:
        """Run the three NWS lookups in order.

        Any failure raises the matching PipelineError and stops the chain;
        nothing partial is returned.
        """
        async with self.nws.session() as client:
            logger.info("Step 1: Looking up location")
            location = await get_location(client, self.nws, coords)

            logger.info("Step 2: Finding nearest station")
            station_id = await find_nearest_station(client, location)

            logger.info("Step 3: Getting latest observation")
            payload = await get_latest_observation(client, self.nws, station_id)

        dewpoint_c = payload.properties.dewpoint.value
        observation = Observation(
            dewpoint_c=dewpoint_c,
            dewpoint_f=celsius_to_fahrenheit(dewpoint_c),
            timestamp=parse_timestamp(payload.properties.timestamp),
            station=station_id,
            city=location.city,
            state=location.state,
        )
        logger.info(f"Station {station_id} dewpoint {observation.dewpoint_f:.1f}F")
        return observation

    async def get_report(self, coords: Coordinates) -> JuiceconReport:
        observation = await self.resolve(coords)
        level = classify(observation.dewpoint_f)
        logger.info(f"{observation.city}, {observation.state}: {level.level_display} ({level.descriptor})")
        return build_report(observation, level)
