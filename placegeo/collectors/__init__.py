"""
Data collectors for placegeo

- OverpassCollector: Natural places from OpenStreetMap
"""

from .overpass import OverpassCollector

__all__ = [
    "OverpassCollector",
]
