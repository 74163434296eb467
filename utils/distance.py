"""
Distance calculation utilities using the Haversine formula
"""
import math
from typing import Iterable, Tuple

EARTH_RADIUS_KM = 6371

def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth
    using the Haversine formula (straight-line distance)

    Args:
        lat1, lon1: First point coordinates (in degrees)
        lat2, lon2: Second point coordinates (in degrees)

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lon1_rad = math.radians(lon1)
    lat2_rad = math.radians(lat2)
    lon2_rad = math.radians(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = math.sin(dlat / 2)**2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2)**2
    c = 2 * math.asin(math.sqrt(a))

    return c * EARTH_RADIUS_KM

def path_length(points: Iterable[Tuple[float, float]]) -> float:
    """Total length in km of the path visiting (lat, lng) points in order"""
    total = 0.0
    previous = None
    for point in points:
        if previous is not None:
            total += haversine_distance(previous[0], previous[1], point[0], point[1])
        previous = point
    return total
