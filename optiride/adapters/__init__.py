"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Geocoding services (Nominatim)
- Rendering engines (Folium)
"""
