"""
Center point resolution

Derives one representative position for a feature from whatever partial
location data Overpass returned for it.
"""

import math
from typing import Callable, Iterable, Optional

from ..records import FeatureRecord, Point


def centroid_of(points: Iterable[Point]) -> Optional[Point]:
    """
    Center of the bounding extent of a set of points

    Non-finite axis values are dropped independently per axis.

    Returns:
        Midpoint of min/max per axis, or None if an axis has no usable value
    """
    lats = []
    lons = []
    for point in points:
        if point is None:
            continue
        if point.lat is not None and math.isfinite(point.lat):
            lats.append(point.lat)
        if point.lon is not None and math.isfinite(point.lon):
            lons.append(point.lon)

    if not lats or not lons:
        return None

    return Point(
        lat=(min(lats) + max(lats)) / 2,
        lon=(min(lons) + max(lons)) / 2,
    )


def _from_direct(record: FeatureRecord) -> Optional[Point]:
    if record.lat is None or record.lon is None:
        return None
    point = Point(lat=record.lat, lon=record.lon)
    return point if point.is_finite() else None


def _from_center(record: FeatureRecord) -> Optional[Point]:
    if record.center is not None and record.center.is_finite():
        return record.center
    return None


def _from_bounds(record: FeatureRecord) -> Optional[Point]:
    if record.bounds is None:
        return None
    point = record.bounds.center()
    return point if point.is_finite() else None


def _from_geometry(record: FeatureRecord) -> Optional[Point]:
    return centroid_of(record.geometry)


def _from_members(record: FeatureRecord) -> Optional[Point]:
    return centroid_of(record.member_points())


# Tried in order; the first one producing a point wins
RESOLVERS: tuple = (
    _from_direct,
    _from_center,
    _from_bounds,
    _from_geometry,
    _from_members,
)


def resolve_center(
    record: FeatureRecord,
    resolvers: Iterable[Callable[[FeatureRecord], Optional[Point]]] = RESOLVERS
) -> Optional[Point]:
    """
    Resolve a single representative point for a feature

    Args:
        record: Feature record
        resolvers: Ordered resolution strategies

    Returns:
        Point, or None if no source yields a finite coordinate pair
    """
    for resolver in resolvers:
        point = resolver(record)
        if point is not None:
            return point
    return None
