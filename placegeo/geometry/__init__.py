"""
Geometry reconstruction engine

Pure functions over in-memory coordinates; no I/O happens here.
"""

from .area import geometry_area, ring_area
from .points import centroid_of, resolve_center
from .projection import CoordinateNormalizer, is_projected_coordinate, transform_coordinate
from .rings import close_ring, connect_and_close, connect_paths, distinct_positions, is_closed_ring
from .simplify import perpendicular_distance, simplify_coordinates

__all__ = [
    "CoordinateNormalizer",
    "centroid_of",
    "close_ring",
    "connect_and_close",
    "connect_paths",
    "distinct_positions",
    "geometry_area",
    "is_closed_ring",
    "is_projected_coordinate",
    "perpendicular_distance",
    "resolve_center",
    "ring_area",
    "simplify_coordinates",
    "transform_coordinate",
]
