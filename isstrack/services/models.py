"""
Value types shared by the caches and the routes. All of them are frozen so a
cache can only ever replace what it holds, never edit it.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator

TLE_LINE_LENGTH = 69


def validate_tle_lines(line1: str, line2: str) -> None:
    """
    Check that two lines look like a TLE pair for the same object.
    The checksum column is not enforced.
    Raises:
        ValueError: if either line is malformed
    """
    line1 = line1.rstrip()
    line2 = line2.rstrip()
    if not line1.startswith("1 "):
        raise ValueError("line1 must start with '1 '")
    if not line2.startswith("2 "):
        raise ValueError("line2 must start with '2 '")
    if len(line1) != TLE_LINE_LENGTH or len(line2) != TLE_LINE_LENGTH:
        raise ValueError(f"TLE lines must be {TLE_LINE_LENGTH} characters long")
    if line1[2:7] != line2[2:7]:
        raise ValueError(f"Catalog numbers differ: {line1[2:7]!r} / {line2[2:7]!r}")


class ElementSet(BaseModel):
    """Orbital element pair. Both lines are set, or neither is (before the first fetch)."""
    model_config = ConfigDict(frozen=True)

    line1: Optional[str] = None
    line2: Optional[str] = None
    last_updated_at: Optional[datetime] = None
    source: Optional[Literal["live", "fallback"]] = None

    @model_validator(mode="after")
    def _check_pair(self):
        if (self.line1 is None) != (self.line2 is None):
            raise ValueError("line1 and line2 must be given together")
        if self.line1 is not None:
            validate_tle_lines(self.line1, self.line2)
        return self

    @property
    def is_empty(self) -> bool:
        return self.line1 is None

    @property
    def lines(self) -> tuple[str, str]:
        return self.line1, self.line2


class GeodeticPosition(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude_deg: float
    longitude_deg: float
    height_km: float
    timestamp: int  # unix seconds

    def to_dict(self):
        """Convert to the public JSON shape"""
        return {
            "lat": self.latitude_deg,
            "lon": self.longitude_deg,
            "height": self.height_km,
            "timestamp": self.timestamp,
        }


class PathPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class PathSnapshot(BaseModel):
    # computed_at is when sampling started, so every sample is relative to it
    model_config = ConfigDict(frozen=True)

    computed_at: datetime
    samples: tuple[PathPoint, ...]

    def to_dict(self):
        """Convert to the public JSON shape"""
        return {
            "time": self.computed_at.isoformat(),
            "path": [{"lat": p.lat, "lon": p.lon} for p in self.samples],
        }
