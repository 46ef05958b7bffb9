"""
Surface area of GeoJSON polygons in square meters
"""

import math
from typing import Any, Dict, Optional, Sequence


# Length of one degree of latitude at the equator (meters)
METERS_PER_DEGREE = 111320.0


def ring_area(ring: Sequence[Sequence[float]]) -> float:
    """
    Planar area of a [lon, lat] ring, scaled to square meters

    Uses the shoelace formula in degree space, then a single local scale
    factor derived from the ring's mean latitude for both axes.
    """
    if len(ring) < 3:
        return 0.0

    area = 0.0
    for i in range(len(ring) - 1):
        lon1, lat1 = ring[i][0], ring[i][1]
        lon2, lat2 = ring[i + 1][0], ring[i + 1][1]
        area += lon1 * lat2 - lon2 * lat1
    area = abs(area) / 2

    avg_lat = sum(p[1] for p in ring) / len(ring)
    meters_per_degree = METERS_PER_DEGREE * math.cos(math.radians(avg_lat))

    return area * meters_per_degree * meters_per_degree


def geometry_area(geometry: Optional[Dict[str, Any]]) -> Optional[float]:
    """
    Area of a Polygon (outer ring) or MultiPolygon (sum of outer rings)

    Returns:
        Square meters, or None for geometry types without an area
    """
    if not geometry:
        return None

    geom_type = geometry.get("type")
    coordinates = geometry.get("coordinates")
    if not coordinates:
        return None

    if geom_type == "Polygon":
        return ring_area(coordinates[0])

    if geom_type == "MultiPolygon":
        return sum(ring_area(polygon[0]) for polygon in coordinates if polygon)

    return None
