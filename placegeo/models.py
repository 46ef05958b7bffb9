"""
Pydantic models for processed place records
GeoJSON geometry types follow RFC 7946 axis order: [longitude, latitude]
"""

from typing import Annotated, Any, Dict, List, Optional, Union, Literal
from pydantic import BaseModel, Field


# ============================================================
# GeoJSON Types
# ============================================================

class GeoJSONPoint(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float]  # [longitude, latitude]


class GeoJSONLineString(BaseModel):
    type: Literal["LineString"] = "LineString"
    coordinates: List[List[float]]  # [[lon, lat], ...]


class GeoJSONPolygon(BaseModel):
    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[List[float]]]  # [outer, *holes]


class GeoJSONMultiLineString(BaseModel):
    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: List[List[List[float]]]


class GeoJSONMultiPolygon(BaseModel):
    type: Literal["MultiPolygon"] = "MultiPolygon"
    coordinates: List[List[List[List[float]]]]


Geometry = Annotated[
    Union[
        GeoJSONPoint,
        GeoJSONLineString,
        GeoJSONPolygon,
        GeoJSONMultiLineString,
        GeoJSONMultiPolygon,
    ],
    Field(discriminator="type"),
]


# ============================================================
# Processed Feature
# ============================================================

class ProcessedFeature(BaseModel):
    """One place ready for persistence; created once, never mutated here"""

    osm_id: int
    osm_type: Literal["node", "way", "relation"]
    name: str
    category: str = "unknown"

    # Representative location (may be missing when only a shape is known)
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    geometry: Optional[Geometry] = None
    tags: Dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def source_id(self) -> str:
        return f"osm:{self.osm_id}"

    @property
    def location(self) -> Optional[str]:
        """WKT point for systems that only index a representative location"""
        if self.latitude is None or self.longitude is None:
            return None
        return create_point_wkt(self.longitude, self.latitude)

    def geometry_dict(self) -> Optional[Dict[str, Any]]:
        if self.geometry is None:
            return None
        return self.geometry.model_dump()

    def to_dict(self) -> Dict[str, Any]:
        """Flat record handed to the persistence layer"""
        return {
            "source": "OSM",
            "source_id": self.source_id,
            "osm_id": self.osm_id,
            "osm_type": self.osm_type,
            "name": self.name,
            "type": self.category,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "location": self.location,
            "geometry": self.geometry_dict(),
            "tags": dict(self.tags),
        }


def create_point_wkt(lon: float, lat: float) -> str:
    """Create a PostGIS-style POINT string (lon first)"""
    return f"POINT({lon} {lat})"
