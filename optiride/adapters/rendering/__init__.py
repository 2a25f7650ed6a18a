"""Rendering adapters - Implementations of MapRendererPort.

Available implementations:
- FoliumMapRenderer: Interactive Leaflet maps via Folium
"""

from .folium_adapter import FoliumMapRenderer

__all__ = ["FoliumMapRenderer"]
