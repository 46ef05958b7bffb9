"""
placegeo: rebuilds render-ready GeoJSON shapes for places from OpenStreetMap data
"""

__version__ = "1.0.0"
