"""Folium map renderer adapter.

Draws the pickup and dropoff of a trip with a straight line between
them. The line is the great-circle chord used for pricing, not a
driving route.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import folium

from ...domain.errors import RenderingError
from ...domain.models import ResolvedPoint


@dataclass
class FoliumMapRenderer:
    """Folium-based interactive map renderer.

    This adapter implements MapRendererPort using Folium for
    generating interactive HTML maps.
    """

    zoom_start: int = 13

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render_html(self, origin: ResolvedPoint, destination: ResolvedPoint) -> str:
        """Render a trip as a standalone HTML document.

        Args:
            origin: Pickup point.
            destination: Dropoff point.

        Returns:
            The complete HTML document of the map.

        Raises:
            RenderingError: If rendering fails.
        """
        self._logger.debug(
            "Rendering trip map",
            extra={"origin": origin.label, "destination": destination.label},
        )

        try:
            center = [
                (origin.latitude + destination.latitude) / 2,
                (origin.longitude + destination.longitude) / 2,
            ]
            m = folium.Map(location=center, zoom_start=self.zoom_start)

            folium.Marker(
                location=[origin.latitude, origin.longitude],
                popup=origin.label,
                tooltip="Pickup",
                icon=folium.Icon(color="green"),
            ).add_to(m)
            folium.Marker(
                location=[destination.latitude, destination.longitude],
                popup=destination.label,
                tooltip="Dropoff",
                icon=folium.Icon(color="red"),
            ).add_to(m)

            folium.PolyLine(
                [
                    [origin.latitude, origin.longitude],
                    [destination.latitude, destination.longitude],
                ],
                weight=3,
                color="blue",
                opacity=0.8,
            ).add_to(m)

            m.fit_bounds(
                [
                    [origin.latitude, origin.longitude],
                    [destination.latitude, destination.longitude],
                ]
            )

            return m.get_root().render()

        except Exception as e:
            self._logger.error("Map rendering failed", extra={"error": str(e)})
            raise RenderingError(
                f"Map rendering failed: {e}",
                renderer_type="folium",
                cause=e,
            ) from e
