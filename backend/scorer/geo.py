"""
Great-circle distance helpers.
"""

import math
from typing import Optional

from models import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """
    Distance in kilometers between two coordinates (Haversine formula).

    Args:
        a: First coordinate, degrees
        b: Second coordinate, degrees

    Returns:
        Great-circle distance in km, 0 for identical points
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_lat / 2) ** 2 +
        math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    )
    # rounding can push h just past 1 for near-antipodal points
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def distance_to_candidate(
    user_location: Coordinate,
    candidate_location: Optional[Coordinate]
) -> Optional[float]:
    """Distance to a candidate, or None when it has no recorded coordinates."""
    if candidate_location is None:
        return None
    return haversine_km(user_location, candidate_location)
