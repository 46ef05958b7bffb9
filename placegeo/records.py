"""
OSM feature records

Data classes for representing raw OSM elements as delivered by Overpass
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple


def _to_float(value: Any) -> Optional[float]:
    """Coerce a JSON number to float, None for anything unusable"""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Point:
    """Geographic position in degrees"""
    lat: float
    lon: float

    def is_finite(self) -> bool:
        return (
            self.lat is not None
            and self.lon is not None
            and math.isfinite(self.lat)
            and math.isfinite(self.lon)
        )

    def to_lon_lat(self) -> List[float]:
        """Position in GeoJSON axis order"""
        return [self.lon, self.lat]

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Point"]:
        """Build from {"lat": .., "lon": ..}; None if either axis is missing"""
        if not isinstance(data, dict):
            return None
        lat = _to_float(data.get("lat"))
        lon = _to_float(data.get("lon"))
        if lat is None or lon is None:
            return None
        return cls(lat=lat, lon=lon)


@dataclass(frozen=True)
class BoundingBox:
    """Bounding box in degrees"""
    south: float
    west: float
    north: float
    east: float

    def center(self) -> Point:
        return Point(
            lat=(self.south + self.north) / 2,
            lon=(self.west + self.east) / 2,
        )

    def to_overpass(self) -> str:
        """Overpass QL bbox filter value (south,west,north,east)"""
        return f"{self.south},{self.west},{self.north},{self.east}"

    @classmethod
    def from_bounds(cls, bounds: Any) -> Optional["BoundingBox"]:
        """Build from Overpass 'bounds' ({minlat, minlon, maxlat, maxlon})"""
        if not isinstance(bounds, dict):
            return None
        values = [_to_float(bounds.get(k)) for k in ("minlat", "minlon", "maxlat", "maxlon")]
        if any(v is None for v in values):
            return None
        south, west, north, east = values
        return cls(south=south, west=west, north=north, east=east)

    @classmethod
    def parse(cls, text: str) -> "BoundingBox":
        """Parse "south,west,north,east" (as used on the command line)"""
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 4:
            raise ValueError(f"Bounding box needs 4 comma-separated values, got {text!r}")
        south, west, north, east = (float(p) for p in parts)
        if south > north or west > east:
            raise ValueError(f"Bounding box is inverted: {text!r}")
        return cls(south=south, west=west, north=north, east=east)


def _parse_points(raw: Any) -> Tuple[Point, ...]:
    # Overpass emits null for nodes missing from the current extract
    if not isinstance(raw, list):
        return ()
    points = []
    for item in raw:
        point = Point.from_dict(item)
        if point is not None:
            points.append(point)
    return tuple(points)


@dataclass(frozen=True)
class RelationMember:
    """One member of a relation, with its resolved geometry"""
    kind: str
    role: str = ""
    geometry: Tuple[Point, ...] = ()
    ref: Optional[int] = None

    def coordinates(self) -> List[List[float]]:
        """Finite member positions as [lon, lat] pairs"""
        return [p.to_lon_lat() for p in self.geometry if p.is_finite()]


@dataclass(frozen=True)
class FeatureRecord:
    """Represents an OSM node, way or relation"""
    kind: str
    id: int
    lat: Optional[float] = None
    lon: Optional[float] = None
    center: Optional[Point] = None
    bounds: Optional[BoundingBox] = None
    geometry: Tuple[Point, ...] = ()
    tags: Dict[str, str] = field(default_factory=dict)
    members: Tuple[RelationMember, ...] = ()

    KINDS = ("node", "way", "relation")

    @property
    def name(self) -> Optional[str]:
        name = self.tags.get("name")
        if name is None:
            return None
        name = str(name).strip()
        return name or None

    def coordinates(self) -> List[List[float]]:
        """Finite positions of the element's own geometry as [lon, lat] pairs"""
        return [p.to_lon_lat() for p in self.geometry if p.is_finite()]

    def member_points(self) -> Iterable[Point]:
        for member in self.members:
            yield from member.geometry

    @classmethod
    def from_element(cls, element: Dict[str, Any]) -> "FeatureRecord":
        """
        Build a record from one Overpass JSON element

        Args:
            element: Element dict from an 'out center geom' / 'out geom' response

        Returns:
            FeatureRecord

        Raises:
            ValueError: If the element type or id is missing or unknown
        """
        kind = element.get("type")
        if kind not in cls.KINDS:
            raise ValueError(f"Unknown OSM element type: {kind!r}")
        try:
            element_id = int(element["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"OSM {kind} without a usable id: {element.get('id')!r}") from e

        members = []
        for raw in element.get("members") or []:
            if not isinstance(raw, dict):
                continue
            ref = raw.get("ref")
            members.append(RelationMember(
                kind=raw.get("type", ""),
                role=raw.get("role") or "",
                geometry=_parse_points(raw.get("geometry")),
                ref=ref if isinstance(ref, int) else None,
            ))

        tags = element.get("tags") or {}
        return cls(
            kind=kind,
            id=element_id,
            lat=_to_float(element.get("lat")),
            lon=_to_float(element.get("lon")),
            center=Point.from_dict(element.get("center")),
            bounds=BoundingBox.from_bounds(element.get("bounds")),
            geometry=_parse_points(element.get("geometry")),
            tags={str(k): str(v) for k, v in tags.items()},
            members=tuple(members),
        )
