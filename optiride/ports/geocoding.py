"""Geocoding port - Abstraction for address lookups.

This protocol defines the contract for geocoding services, allowing
different implementations (Nominatim, a test fake, etc.) to be used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import GeocodedPlace


class GeocoderPort(Protocol):
    """Port for geocoding services.

    Implementation: adapters/geocoding/nominatim_adapter.py

    Forward lookups are single-candidate and best-effort; callers are
    expected to treat None as "not found".
    """

    def geocode(self, query: str) -> Optional[GeocodedPlace]:
        """Look up free text and return its best candidate.

        Args:
            query: Address or place name (e.g., "Times Square, New York").

        Returns:
            The first candidate, or None if the service found nothing.

        Raises:
            GeocodingError: If the service could not be reached or
                rejected the request.
        """
        ...

    def reverse(self, latitude: float, longitude: float) -> Optional[str]:
        """Reverse geocode coordinates to a human-readable address.

        Args:
            latitude: Degrees north.
            longitude: Degrees east.

        Returns:
            The address label, or None if the service found nothing.

        Raises:
            GeocodingError: If the service could not be reached or
                rejected the request.
        """
        ...
