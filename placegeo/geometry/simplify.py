"""
Douglas-Peucker line simplification on [lon, lat] coordinate lists
"""

import math
from typing import List, Sequence


Coordinate = Sequence[float]


def perpendicular_distance(
    point: Coordinate,
    line_start: Coordinate,
    line_end: Coordinate
) -> float:
    """
    Distance from a point to a line segment, in coordinate units

    The projection is clamped to the segment. A zero-length segment
    degrades to the point-to-point distance.
    """
    x, y = point[0], point[1]
    x1, y1 = line_start[0], line_start[1]
    x2, y2 = line_end[0], line_end[1]

    a = x - x1
    b = y - y1
    c = x2 - x1
    d = y2 - y1

    len_sq = c * c + d * d
    if len_sq == 0:
        return math.sqrt(a * a + b * b)

    param = (a * c + b * d) / len_sq
    if param < 0:
        xx, yy = x1, y1
    elif param > 1:
        xx, yy = x2, y2
    else:
        xx = x1 + param * c
        yy = y1 + param * d

    dx = x - xx
    dy = y - yy
    return math.sqrt(dx * dx + dy * dy)


def _douglas_peucker(points: List[Coordinate], tolerance: float) -> List[Coordinate]:
    if len(points) <= 2:
        return points

    start = points[0]
    end = points[-1]
    max_distance = 0.0
    max_index = 0

    for i in range(1, len(points) - 1):
        distance = perpendicular_distance(points[i], start, end)
        if distance > max_distance:
            max_distance = distance
            max_index = i

    if max_distance > tolerance:
        left = _douglas_peucker(points[:max_index + 1], tolerance)
        right = _douglas_peucker(points[max_index:], tolerance)
        # Split point ends left and starts right
        return left[:-1] + right

    return [start, end]


def simplify_coordinates(
    coordinates: Sequence[Coordinate],
    tolerance: float
) -> List[Coordinate]:
    """
    Reduce a polyline's point count while keeping its shape

    Args:
        coordinates: [lon, lat] positions
        tolerance: Maximum allowed deviation, in degrees

    Returns:
        New list with the first and last positions always kept

    Raises:
        ValueError: If tolerance is negative or not finite
    """
    if tolerance is None or not math.isfinite(tolerance) or tolerance < 0:
        raise ValueError(f"Simplification tolerance must be a finite non-negative number, got {tolerance}")

    points = list(coordinates)
    if len(points) <= 2:
        return points

    return _douglas_peucker(points, tolerance)
