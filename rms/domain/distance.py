"""
Distance calculation using the Haversine formula.

Assumption
----------
We use great-circle (Haversine) distance on a sphere of radius 6371 km
rather than road distance.  Delivery estimates only need a rough figure,
and this keeps the service free of external routing APIs.

Unit policy
-----------
Distances shorter than ``meters_below_km`` (default 1 km) are reported in
meters, everything else in kilometers.  The magnitude is rounded to two
decimals in the reported unit.

Complexity: O(1) per call.
"""

import math

from .entities import Coordinate, DistanceResult
from .enums import DistanceUnit
from .errors import ComputationError
from .validation import is_finite_coordinate

EARTH_RADIUS_KM = 6_371.0
DEFAULT_METERS_BELOW_KM = 1.0


def haversine_km(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    # Rounding can push ``a`` a hair above 1 for antipodal points
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(1.0, a)))


def distance(
    a: Coordinate,
    b: Coordinate,
    meters_below_km: float = DEFAULT_METERS_BELOW_KM,
) -> DistanceResult:
    """Distance between *a* and *b* with the unit picked by magnitude."""
    if not (is_finite_coordinate(a) and is_finite_coordinate(b)):
        raise ComputationError("Coordinates must be finite numbers.")

    km = haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
    if km < meters_below_km:
        return DistanceResult(round(km * 1000, 2), DistanceUnit.METERS)
    return DistanceResult(round(km, 2), DistanceUnit.KILOMETERS)
