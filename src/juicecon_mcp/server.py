import logging
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv
from mcp.server.fastmcp import Context, FastMCP
from pydantic import ValidationError

from juicecon_mcp.config import config
from juicecon_mcp.errors import PipelineError, ZipCodeNotFound
from juicecon_mcp.juicecon import classify
from juicecon_mcp.location import lookup_zip
from juicecon_mcp.models import Coordinates, LevelSummary
from juicecon_mcp.weather import WeatherService

load_dotenv()

# Set up logging
log_dir = Path(config.log_dir)
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / "juicecon.log"

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.FileHandler(log_file),
        logging.StreamHandler(),  # stderr, stdout belongs to the stdio transport
    ],
)

logger = logging.getLogger("juicecon.server")

mcp = FastMCP(
    "JUICECON",
    instructions="Current humidity misery level (JUICECON) for US locations, from NWS dewpoint observations",
    dependencies=["httpx", "pydantic", "pydantic-settings", "python-dotenv"],
    log_level=config.log_level,
    port=config.port,
)

weather_service = WeatherService()


def _error(message: str, code: str) -> Dict[str, str]:
    return {"error": message, "code": code}


async def _report_for(coords: Coordinates, ctx: Context) -> Dict[str, Any]:
    await ctx.info(f"Resolving JUICECON for {coords.latitude:.4f},{coords.longitude:.4f}")
    try:
        report = await weather_service.get_report(coords)
    except PipelineError as e:
        logger.error(f"Error getting JUICECON: {str(e)} (status {e.status_code})")
        await ctx.error(f"Unable to fetch weather data: {str(e)}")
        return _error(f"Unable to fetch weather data: {str(e)}", e.code)

    await ctx.info(f"{report.level_display}: {report.descriptor}")
    return report.model_dump(by_alias=True)


# Tools
@mcp.tool()
async def get_juicecon(latitude: float, longitude: float, ctx: Context) -> Dict[str, Any]:
    """
    Get the current JUICECON level for a coordinate pair

    Args:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
    """
    logger.info(f"Starting JUICECON request for {latitude},{longitude}")
    try:
        coords = Coordinates(latitude=latitude, longitude=longitude)
    except ValidationError as e:
        logger.warning(f"Invalid coordinates {latitude},{longitude}")
        return _error(f"Invalid coordinates: {e.error_count()} validation error(s)", "INVALID_PARAMS")

    return await _report_for(coords, ctx)


@mcp.tool()
async def get_juicecon_by_zip(zip_code: str, ctx: Context) -> Dict[str, Any]:
    """
    Get the current JUICECON level for a US ZIP code

    Args:
        zip_code: 5-digit US ZIP code
    """
    logger.info(f"Starting JUICECON request for ZIP {zip_code}")
    if not (zip_code or "").strip():
        return _error("Must provide a ZIP code", "INVALID_PARAMS")

    try:
        coords = lookup_zip(zip_code)
    except ZipCodeNotFound as e:
        logger.warning(str(e))
        return _error(str(e), e.code)

    return await _report_for(coords, ctx)


@mcp.tool()
def classify_dewpoint(dewpoint_f: float) -> Dict[str, Any]:
    """
    Classify a Fahrenheit dewpoint on the JUICECON scale

    Args:
        dewpoint_f: Dewpoint in degrees Fahrenheit
    """
    return LevelSummary.from_level(classify(dewpoint_f)).model_dump(by_alias=True)


# Prompts
@mcp.prompt()
def juicecon_briefing(report: Dict[str, Any]) -> str:
    """Turn a JUICECON report into a short briefing"""
    location = report.get("location") or {}
    place = ", ".join(part for part in (location.get("city"), location.get("state")) if part) or "Unknown location"
    dewpoint = report.get("dewpoint")
    dewpoint_text = f"{dewpoint:.1f}°F" if isinstance(dewpoint, (int, float)) else "N/A"

    return f"""Please write a short, dry-humored humidity briefing from this JUICECON report:
        1. State the level and what it means
        2. Mention the dewpoint and where it was measured
        3. Give one piece of practical advice for the conditions

        Location: {place} (station {location.get("station", "unknown")})
        Observed at: {report.get("timestamp", "Unknown time")}
        Level: {report.get("levelDisplay", "N/A")} - {report.get("descriptor", "N/A")}
        Description: {report.get("description", "N/A")}
        Dewpoint: {dewpoint_text}
        """


def main() -> None:
    logger.info(f"JUICECON server starting ({config.transport})")
    mcp.run(transport=config.transport)


if __name__ == "__main__":
    main()
