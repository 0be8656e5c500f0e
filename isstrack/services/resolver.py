"""
Turns an element set and a point in time into a geodetic position using
skyfield's SGP4 propagation and WGS84 transform.
"""

import math
from datetime import datetime

from skyfield.api import EarthSatellite, load, wgs84

from isstrack.core.errors import PropagationError
from isstrack.services.models import ElementSet, GeodeticPosition, validate_tle_lines


class Propagator:
    """An element set parsed once and bound to a timescale"""

    def __init__(self, satellite: EarthSatellite, ts):
        self.satellite = satellite
        self.ts = ts

    def at(self, when: datetime) -> GeodeticPosition:
        """
        Propagate to `when` and convert to latitude/longitude/height
        Args:
            when: timezone aware datetime
        Returns:
            GeodeticPosition
        """
        t = self.ts.from_datetime(when)
        geocentric = self.satellite.at(t)

        # SGP4 failures come back as NaN coordinates with a message attached
        if not all(math.isfinite(v) for v in geocentric.position.km):
            message = getattr(geocentric, "message", None) or "non-finite position"
            raise PropagationError(f"Propagation to {when.isoformat()} failed: {message}")

        subpoint = wgs84.geographic_position_of(geocentric)
        return GeodeticPosition(
            latitude_deg=subpoint.latitude.degrees,
            longitude_deg=subpoint.longitude.degrees,
            height_km=subpoint.elevation.km,
            timestamp=int(when.timestamp()),
        )


class PositionResolver:
    def __init__(self, ts=None):
        self.ts = ts or load.timescale()

    def load(self, elements: ElementSet) -> Propagator:
        """Parse the element pair. Raises PropagationError if it is absent or malformed."""
        if elements.is_empty:
            raise PropagationError("No element set available")

        line1, line2 = elements.lines
        try:
            validate_tle_lines(line1, line2)
            satellite = EarthSatellite(line1, line2, ts=self.ts)
        except ValueError as e:
            raise PropagationError(f"Malformed element set: {e}") from e

        if satellite.model.error:
            raise PropagationError(f"Element set rejected by SGP4 (error {satellite.model.error})")
        return Propagator(satellite, self.ts)

    def resolve(self, elements: ElementSet, when: datetime) -> GeodeticPosition:
        return self.load(elements).at(when)
