"""Rendering port - Abstraction for trip map generation.

This protocol defines the contract for map rendering, allowing
different implementations (Folium, Plotly, etc.) to be used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import ResolvedPoint


class MapRendererPort(Protocol):
    """Port for map rendering.

    Implementation: adapters/rendering/folium_adapter.py

    Map renderers draw the pickup and dropoff of a trip on an
    interactive map.
    """

    def render_html(self, origin: ResolvedPoint, destination: ResolvedPoint) -> str:
        """Render a trip as a standalone HTML document.

        Args:
            origin: Pickup point.
            destination: Dropoff point.

        Returns:
            The complete HTML document of the map.
        """
        ...
