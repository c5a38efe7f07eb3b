from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Timestamp used when the upstream observation time cannot be parsed
ZERO_TIMESTAMP = datetime(1, 1, 1, tzinfo=timezone.utc)


class Coordinates(BaseModel):
    """Geographic coordinates"""
    model_config = ConfigDict(frozen=True)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class LocationDescriptor(BaseModel):
    """NWS grid point: station list URL and nearby city"""
    observation_stations: str
    city: str = ""
    state: str = ""


class StationList(BaseModel):
    """Observation stations, nearest first"""
    station_ids: List[str]

    @property
    def nearest(self) -> Optional[str]:
        """First station as ranked by the provider, or None when the list is empty"""
        return self.station_ids[0] if self.station_ids else None


class Observation(BaseModel):
    """Latest dewpoint at a station"""
    dewpoint_c: float
    dewpoint_f: float
    timestamp: datetime = ZERO_TIMESTAMP
    station: str
    city: str = ""
    state: str = ""


class SeverityLevel(BaseModel):
    """JUICECON level"""
    model_config = ConfigDict(frozen=True)
    level: Optional[int] = None
    descriptor: str
    description: str

    @property
    def all_clear(self) -> bool:
        return self.level is None

    @property
    def level_display(self) -> str:
        if self.all_clear:
            return "ALL CLEAR"
        return f"JUICECON {self.level}"


class LevelSummary(BaseModel):
    """Wire form of a JUICECON level"""
    model_config = ConfigDict(populate_by_name=True)
    level: Optional[int]
    level_display: str = Field(..., alias="levelDisplay")
    descriptor: str
    description: str
    all_clear: bool = Field(..., alias="allClear")

    @classmethod
    def from_level(cls, level: SeverityLevel) -> "LevelSummary":
        return cls(
            level=level.level,
            level_display=level.level_display,
            descriptor=level.descriptor,
            description=level.description,
            all_clear=level.all_clear,
        )


class ReportLocation(BaseModel):
    """Where an observation was made"""
    city: str
    state: str
    station: str


class JuiceconReport(LevelSummary):
    """JUICECON level with the observation behind it"""
    dewpoint: float
    location: ReportLocation
    timestamp: str
