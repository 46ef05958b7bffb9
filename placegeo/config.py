"""
Configuration settings for placegeo
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import math


@dataclass
class APIConfig:
    """Overpass API endpoints and request settings"""
    # Servers are tried in order; gateway errors rotate to the next one
    overpass_urls: List[str] = field(default_factory=lambda: [
        "https://overpass-api.de/api/interpreter",
        "https://lambert.openstreetmap.de/api/interpreter",
    ])
    overpass_timeout: int = 180  # Server-side query timeout (seconds)

    # Request settings
    request_timeout: int = 300
    max_retries: int = 3
    retry_delay: float = 5.0
    max_backoff: float = 60.0
    min_request_interval: float = 1.5

    # Batch size for id lookups
    id_batch_size: int = 15

    user_agent: str = "placegeo/1.0"


@dataclass
class GeometryConfig:
    """Geometry reconstruction settings"""
    # Douglas-Peucker tolerances, in degrees
    area_tolerance: float = 0.0002  # ~20m, for area boundaries
    route_tolerance: float = 0.0001  # ~10m, for route lines

    # Relations/ways with one of these route=* values are treated as lines
    route_types: List[str] = field(default_factory=lambda: [
        "hiking",
        "bicycle",
        "mtb",
    ])

    # Lambert-93 (RGF93 v2b), the French national grid
    projected_crs: str = (
        "+proj=lcc +lat_0=46.5 +lon_0=3 +lat_1=49 +lat_2=44 "
        "+x_0=700000 +y_0=6600000 +ellps=GRS80 "
        "+towgs84=0,0,0,0,0,0,0 +units=m +no_defs"
    )
    geographic_crs: str = "EPSG:4326"

    # Practical bounds of the grid, used to detect projected input
    projected_x_range: List[float] = field(default_factory=lambda: [50000.0, 1500000.0])
    projected_y_range: List[float] = field(default_factory=lambda: [5500000.0, 7500000.0])


@dataclass
class FilterConfig:
    """Inclusion rules keyed by feature category"""
    min_name_length: int = 3

    # Minimum area per category (square meters)
    min_area: Dict[str, float] = field(default_factory=lambda: {
        "park": 50000.0,
        "wood": 100000.0,
        "forest": 100000.0,
    })

    # Tags that must be present per category (route relations use "<value>_route")
    require_tags: Dict[str, List[str]] = field(default_factory=lambda: {
        "hiking_route": ["ref"],
    })

    # Support structures, never the feature itself
    excluded_tags: Dict[str, List[str]] = field(default_factory=lambda: {
        "building": ["yes"],
        "office": ["government", "administrative"],
    })


@dataclass
class PipelineConfig:
    """Pipeline configuration"""
    # Tag values that make an element a candidate place
    supported_tags: Dict[str, List[str]] = field(default_factory=lambda: {
        "natural": [
            "peak",
            "volcano",
            "gorge",
            "canyon",
            "cave_entrance",
            "glacier",
            "waterfall",
            "hot_spring",
            "geyser",
            "beach",
            "dune",
            "cape",
            "sinkhole",
            "ridge",
            "saddle",
        ],
        "waterway": ["rapids"],
        "boundary": ["national_park", "protected_area"],
        "leisure": ["nature_reserve", "park"],
        "landuse": ["forest"],
        "water": ["lake", "reservoir", "lagoon"],
        "place": ["island", "islet"],
        "tourism": ["wilderness_hut", "alpine_hut"],
        "route": ["hiking"],
    })

    # Output settings
    output_dir: str = "output"
    cache_dir: Optional[str] = None

    api: APIConfig = field(default_factory=APIConfig)
    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    filters: FilterConfig = field(default_factory=FilterConfig)


# Global config instance
config = PipelineConfig()


def get_config() -> PipelineConfig:
    """Get global configuration"""
    return config


def validate_config(config: PipelineConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    geometry = getattr(config, "geometry", None)
    if geometry is None:
        errors.append("geometry configuration is required but not set")
    else:
        for name in ("area_tolerance", "route_tolerance"):
            value = getattr(geometry, name, None)
            if value is None or not math.isfinite(value):
                errors.append(f"geometry.{name} must be a finite number, got {value}")
            elif value < 0:
                errors.append(f"geometry.{name} must not be negative, got {value}")
        for name in ("projected_x_range", "projected_y_range"):
            bounds = getattr(geometry, name, None)
            if not bounds or len(bounds) != 2 or bounds[0] >= bounds[1]:
                errors.append(f"geometry.{name} must be an increasing [min, max] pair, got {bounds}")
        if not geometry.projected_crs:
            errors.append("geometry.projected_crs is required but not set")

    filters = getattr(config, "filters", None)
    if filters is None:
        errors.append("filters configuration is required but not set")
    else:
        for category, area in filters.min_area.items():
            if area < 0:
                errors.append(f"filters.min_area[{category!r}] must not be negative, got {area}")

    api = getattr(config, "api", None)
    if api is None:
        errors.append("api configuration is required but not set")
    else:
        if not api.overpass_urls:
            errors.append("api.overpass_urls must list at least one server")
        if api.max_retries < 1:
            errors.append(f"api.max_retries must be at least 1, got {api.max_retries}")
        if api.id_batch_size < 1:
            errors.append(f"api.id_batch_size must be at least 1, got {api.id_batch_size}")

    if not getattr(config, "supported_tags", None):
        errors.append("supported_tags is required but not set")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
