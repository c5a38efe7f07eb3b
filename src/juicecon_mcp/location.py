import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from juicecon_mcp.config import config
from juicecon_mcp.errors import LocationLookupFailed, ZipCodeNotFound
from juicecon_mcp.models import Coordinates, LocationDescriptor
from juicecon_mcp.nws import NWSClient, PointsPayload, fetch_json

logger = logging.getLogger("juicecon.location")

DEFAULT_ZIP_TABLE = Path(__file__).resolve().parent / "data" / "zips.json"


async def get_location(client: httpx.AsyncClient, nws: NWSClient, coords: Coordinates) -> LocationDescriptor:
    """Resolve coordinates to the NWS grid point: station list URL plus city and state"""
    url = nws.points_url(coords)
    logger.info(f"Looking up location for {coords.latitude:.4f},{coords.longitude:.4f}")
    data = await fetch_json(client, url, LocationLookupFailed)

    try:
        point = PointsPayload.model_validate(data)
    except ValidationError as e:
        logger.error(f"Malformed points response from {url}: {str(e)}")
        raise LocationLookupFailed(f"failed to decode points response: {str(e)}") from e

    relative = point.properties.relative_location.properties
    descriptor = LocationDescriptor(
        observation_stations=point.properties.observation_stations,
        city=relative.city,
        state=relative.state,
    )
    logger.debug(f"Location descriptor: {descriptor}")
    return descriptor


@lru_cache(maxsize=4)
def _load_zip_table(path: str) -> Dict[str, Coordinates]:
    logger.info(f"Loading ZIP table from {path}")
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return {
        zip_code: Coordinates(latitude=float(entry["lat"]), longitude=float(entry["lon"]))
        for zip_code, entry in raw.items()
    }


def lookup_zip(zip_code: str, table: Optional[str] = None) -> Coordinates:
    """Get coordinates for a US ZIP code from the static lookup table"""
    path = table or config.zip_table or str(DEFAULT_ZIP_TABLE)
    zip_code = (zip_code or "").strip()
    coords = _load_zip_table(path).get(zip_code)
    if coords is None:
        raise ZipCodeNotFound(zip_code)
    return coords
