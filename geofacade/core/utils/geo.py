"""
Geographic helpers used when comparing results from different providers.

Usage:
    from geofacade.core.utils.geo import haversine_distance

    distance_m = haversine_distance(48.8566, 2.3522, 48.8584, 2.2945)
    distance_km = haversine_distance(48.8566, 2.3522, 51.5074, -0.1278, unit='kilometers')
"""

import math
from typing import Literal

EARTH_RADIUS = {
    'meters': 6_371_000,
    'kilometers': 6_371,
    'miles': 3_958.8,
}

DistanceUnit = Literal['meters', 'kilometers', 'miles']


def haversine_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    unit: DistanceUnit = 'meters'
) -> float:
    """
    Great-circle distance between two points given in decimal degrees.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point
        unit: 'meters', 'kilometers' or 'miles'

    Returns:
        Distance in the requested unit
    """
    if unit not in EARTH_RADIUS:
        raise ValueError(f"Unknown unit: {unit}. Choose from: {list(EARTH_RADIUS)}")

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2 +
        math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    return EARTH_RADIUS[unit] * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
