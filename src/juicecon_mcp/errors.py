from typing import Optional


class PipelineError(Exception):
    """Base class for failures of the location-to-observation pipeline.

    Carries the stage it came from, a machine readable code for the boundary
    layer and, when the upstream answered with one, its HTTP status code.
    """

    stage = "pipeline"
    code = "WEATHER_API_ERROR"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return f"{self.stage} lookup failed: {self.message}"


class LocationLookupFailed(PipelineError):
    stage = "location"
    code = "LOCATION_LOOKUP_FAILED"


class StationLookupFailed(PipelineError):
    stage = "stations"
    code = "STATION_LOOKUP_FAILED"


class NoStationsAvailable(PipelineError):
    stage = "stations"
    code = "NO_STATIONS_AVAILABLE"


class ObservationLookupFailed(PipelineError):
    stage = "observation"
    code = "OBSERVATION_LOOKUP_FAILED"


class DewpointUnavailable(PipelineError):
    stage = "observation"
    code = "DEWPOINT_UNAVAILABLE"


class ZipCodeNotFound(ValueError):
    code = "ZIP_NOT_FOUND"

    def __init__(self, zip_code: str):
        super().__init__(f"ZIP code not found: {zip_code}")
        self.zip_code = zip_code
