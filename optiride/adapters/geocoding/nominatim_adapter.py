"""Nominatim geocoder adapter.

This adapter wraps geopy's OpenStreetMap Nominatim client with:
- Configuration injection
- Single-candidate lookups
- Typed errors separating transport failures from upstream rejections
- Logging

Lookups are neither cached nor retried: one call per query, and a
failure is reported to the caller as is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable
from geopy.geocoders import Nominatim

from ...config import GeocodingConfig, get_config
from ...domain.errors import GeocodingError
from ...domain.models import GeocodedPlace


@dataclass
class NominatimGeocoderAdapter:
    """Nominatim geocoder adapter.

    This adapter implements GeocoderPort using OpenStreetMap's Nominatim
    geocoding service.

    Attributes:
        config: Geocoding configuration
    """

    config: GeocodingConfig = field(default_factory=lambda: get_config().geocoding)

    _geolocator: Optional[Nominatim] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_geolocator(self) -> Nominatim:
        """Get or initialize the Nominatim client."""
        if self._geolocator is not None:
            return self._geolocator

        self._logger.debug(
            "Initializing Nominatim geocoder",
            extra={
                "user_agent": self.config.user_agent,
                "domain": self.config.domain,
                "timeout": self.config.timeout_seconds,
            },
        )

        self._geolocator = Nominatim(
            user_agent=self.config.user_agent,
            timeout=self.config.timeout_seconds,
            domain=self.config.domain,
            scheme=self.config.scheme,
        )
        return self._geolocator

    def geocode(self, query: str) -> Optional[GeocodedPlace]:
        """Geocode a free-text query.

        Args:
            query: The address or place name to look up.

        Returns:
            The first candidate, or None if nothing matched.

        Raises:
            GeocodingError: If the service is unreachable or rejects the
                request.
        """
        if not query or not query.strip():
            return None

        try:
            location = self._get_geolocator().geocode(
                query,
                exactly_one=True,
                language=self.config.language or False,
            )
        except (GeocoderTimedOut, GeocoderUnavailable) as e:
            self._logger.warning(
                "Geocode transport error",
                extra={"query": query, "error": str(e)},
            )
            raise GeocodingError(
                "Geocoding service unreachable",
                cause=e,
                query=query,
                is_transport_error=True,
            ) from e
        except GeocoderServiceError as e:
            self._logger.warning(
                "Geocode service error",
                extra={"query": query, "error": str(e)},
            )
            raise GeocodingError(
                "Geocoding service rejected the request",
                cause=e,
                query=query,
            ) from e

        if location is None:
            self._logger.debug("Geocode returned no result", extra={"query": query})
            return None

        place = GeocodedPlace(
            latitude=float(location.latitude),
            longitude=float(location.longitude),
            display_label=location.address or query,
        )
        self._logger.debug(
            "Geocode success",
            extra={"query": query, "label": place.display_label},
        )
        return place

    def reverse(self, latitude: float, longitude: float) -> Optional[str]:
        """Reverse geocode coordinates to an address.

        Args:
            latitude: Degrees north.
            longitude: Degrees east.

        Returns:
            The address label, or None if nothing matched.

        Raises:
            GeocodingError: If the service is unreachable or rejects the
                request.
        """
        query = f"{latitude},{longitude}"
        try:
            result = self._get_geolocator().reverse(
                (latitude, longitude),
                exactly_one=True,
                language=self.config.language or False,
                zoom=self.config.reverse_zoom,
            )
        except (GeocoderTimedOut, GeocoderUnavailable) as e:
            self._logger.warning(
                "Reverse geocode transport error",
                extra={"lat": latitude, "lon": longitude, "error": str(e)},
            )
            raise GeocodingError(
                "Geocoding service unreachable",
                cause=e,
                query=query,
                is_transport_error=True,
            ) from e
        except GeocoderServiceError as e:
            self._logger.warning(
                "Reverse geocode service error",
                extra={"lat": latitude, "lon": longitude, "error": str(e)},
            )
            raise GeocodingError(
                "Geocoding service rejected the request",
                cause=e,
                query=query,
            ) from e

        if result is None:
            return None
        return result.address or None
