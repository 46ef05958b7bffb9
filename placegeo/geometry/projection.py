"""
Projected coordinate detection and conversion

Some upstream sources hand out French national grid (Lambert-93) meters
where degrees are expected. Those pairs are detected by range and
converted to WGS84; everything else passes through untouched.
"""

import math
from typing import Any, Dict, List, Optional

from loguru import logger
from pyproj import Transformer
from pyproj.exceptions import ProjError

from ..config import GeometryConfig, get_config
from ..records import Point


class CoordinateNormalizer:
    """Converts Lambert-93 pairs to geographic degrees"""

    def __init__(self, geometry_config: Optional[GeometryConfig] = None):
        self.config = geometry_config or get_config().geometry
        self._transformer = None

    @property
    def transformer(self) -> Transformer:
        if self._transformer is None:
            self._transformer = Transformer.from_crs(
                self.config.projected_crs, self.config.geographic_crs, always_xy=True
            )
        return self._transformer

    def is_projected(self, x: float, y: float) -> bool:
        """
        Whether (x, y) looks like grid meters rather than lon/lat degrees

        Values must be outside geographic ranges and inside the grid's
        practical extent.
        """
        if x is None or y is None or not (math.isfinite(x) and math.isfinite(y)):
            return False
        if abs(x) <= 180 and abs(y) <= 90:
            return False
        x_min, x_max = self.config.projected_x_range
        y_min, y_max = self.config.projected_y_range
        return x_min < x < x_max and y_min < y < y_max

    def projected_to_geographic(self, x: float, y: float) -> Optional[Point]:
        """Transform grid meters to degrees; None if the transform fails"""
        try:
            lon, lat = self.transformer.transform(x, y, errcheck=True)
        except (ProjError, ValueError, TypeError) as e:
            logger.warning(f"Failed to transform projected coordinates ({x}, {y}): {e}")
            return None
        if not (math.isfinite(lon) and math.isfinite(lat)):
            logger.warning(f"Projected coordinates ({x}, {y}) transformed to non-finite values")
            return None
        return Point(lat=lat, lon=lon)

    def to_geographic(self, x: float, y: float) -> Optional[Point]:
        """
        Normalize an (x, y) pair to a geographic point

        Pairs that are not projected are assumed to already be (lon, lat).
        """
        if self.is_projected(x, y):
            return self.projected_to_geographic(x, y)
        return Point(lat=y, lon=x)

    def _position(self, position: List[float]) -> List[float]:
        if len(position) < 2:
            return position
        point = self.to_geographic(position[0], position[1])
        # Keep the original position when conversion fails
        if point is None:
            return position
        return [point.lon, point.lat]

    def _walk(self, coordinates: Any, depth: int) -> Any:
        if depth == 0:
            return self._position(coordinates)
        return [self._walk(c, depth - 1) for c in coordinates]

    # Nesting depth of positions in each GeoJSON geometry type
    DEPTHS = {
        "Point": 0,
        "LineString": 1,
        "Polygon": 2,
        "MultiLineString": 2,
        "MultiPolygon": 3,
    }

    def needs_transform(self, geometry: Optional[Dict[str, Any]]) -> bool:
        """Whether any position of the geometry is in projected meters"""
        if not geometry or geometry.get("type") not in self.DEPTHS:
            return False
        return any(self.is_projected(p[0], p[1]) for p in _positions(
            geometry.get("coordinates") or [], self.DEPTHS[geometry["type"]]
        ))

    def transform_geometry(self, geometry: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Convert every projected position of a GeoJSON geometry

        Unknown geometry types are returned unchanged.
        """
        if not geometry or not geometry.get("coordinates"):
            return geometry

        depth = self.DEPTHS.get(geometry.get("type"))
        if depth is None:
            return geometry

        return {
            **geometry,
            "coordinates": self._walk(geometry["coordinates"], depth),
        }


def _positions(coordinates: Any, depth: int):
    if depth == 0:
        if len(coordinates) >= 2:
            yield coordinates
        return
    for c in coordinates:
        yield from _positions(c, depth - 1)


_default_normalizer: Optional[CoordinateNormalizer] = None


def _normalizer() -> CoordinateNormalizer:
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = CoordinateNormalizer()
    return _default_normalizer


def is_projected_coordinate(x: float, y: float) -> bool:
    """Module-level shortcut using the global configuration"""
    return _normalizer().is_projected(x, y)


def transform_coordinate(x: float, y: float) -> Optional[Point]:
    """Module-level shortcut using the global configuration"""
    return _normalizer().to_geographic(x, y)
