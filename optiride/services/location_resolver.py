"""Location resolution.

A location descriptor becomes a ResolvedPoint in two steps. ``plan``
decides, without any I/O, whether the input already carries its
coordinates (LiteralLocation) or has to be looked up (NeedsLookup).
``resolve`` then performs at most one geocoder call.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from ..domain.errors import GeocodingError, LocationResolutionError, ResolutionFailure
from ..domain.models import (
    CoordinateInput,
    Endpoint,
    LocationInput,
    ResolvedPoint,
    TextInput,
)
from ..ports.geocoding import GeocoderPort

_NUMBER = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)"
_LAT_LON_RE = re.compile(rf"^\s*({_NUMBER})(?:\s*,\s*|\s+)({_NUMBER})\s*$")


@dataclass(frozen=True, slots=True)
class LiteralLocation:
    """Input that already is a point; no lookup needed."""

    point: ResolvedPoint


@dataclass(frozen=True, slots=True)
class NeedsLookup:
    """Free text that must go through the geocoder."""

    query: str


LocationPlan = Union[LiteralLocation, NeedsLookup]


def parse_lat_lon(text: str) -> Optional[tuple[float, float]]:
    """Parse ``"lat, lon"`` or ``"lat lon"`` into a valid coordinate pair.

    Returns None when the text is not exactly two decimal numbers or
    when they fall outside latitude/longitude ranges.
    """
    match = _LAT_LON_RE.match(text)
    if match is None:
        return None
    lat, lon = float(match.group(1)), float(match.group(2))
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return lat, lon


@dataclass
class LocationResolver:
    """Turns pickup/dropoff descriptors into resolved points.

    Attributes:
        geocoder: Forward geocoding service used for free text
    """

    geocoder: GeocoderPort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def plan(self, location: LocationInput, endpoint: Endpoint) -> LocationPlan:
        """Decide how a location will be resolved.

        Raises:
            LocationResolutionError: If the text is blank or the
                coordinates are not a valid point.
        """
        if isinstance(location, CoordinateInput):
            try:
                point = ResolvedPoint(
                    latitude=float(location.latitude),
                    longitude=float(location.longitude),
                    label=endpoint.coordinate_label,
                )
            except ValueError as e:
                raise LocationResolutionError(
                    "Invalid coordinates",
                    cause=e,
                    reason=ResolutionFailure.NOT_FOUND,
                ) from e
            return LiteralLocation(point)

        text = location.query.strip() if isinstance(location, TextInput) else ""
        if not text:
            raise LocationResolutionError(
                f"{endpoint.display_name} text is empty",
                reason=ResolutionFailure.EMPTY_INPUT,
            )

        coordinates = parse_lat_lon(text)
        if coordinates is not None:
            lat, lon = coordinates
            return LiteralLocation(ResolvedPoint(latitude=lat, longitude=lon, label=text))

        return NeedsLookup(text)

    def lookup(self, query: str) -> ResolvedPoint:
        """Geocode free text with a single, uncached request.

        Raises:
            LocationResolutionError: If nothing was found or the geocoder
                failed.
        """
        try:
            place = self.geocoder.geocode(query)
        except GeocodingError as e:
            reason = (
                ResolutionFailure.TRANSPORT_ERROR
                if e.is_transport_error
                else ResolutionFailure.NOT_FOUND
            )
            raise LocationResolutionError(
                f"Could not geocode {query!r}",
                cause=e,
                reason=reason,
                query=query,
            ) from e

        if place is None:
            self._logger.info("No geocoding candidate", extra={"query": query})
            raise LocationResolutionError(
                f"No match for {query!r}",
                reason=ResolutionFailure.NOT_FOUND,
                query=query,
            )

        try:
            return ResolvedPoint(
                latitude=place.latitude,
                longitude=place.longitude,
                label=place.display_label or query,
            )
        except ValueError as e:
            raise LocationResolutionError(
                f"Geocoder returned invalid coordinates for {query!r}",
                cause=e,
                reason=ResolutionFailure.NOT_FOUND,
                query=query,
            ) from e

    def resolve(self, location: LocationInput, endpoint: Endpoint) -> ResolvedPoint:
        """Resolve a location descriptor to a point.

        Args:
            location: Coordinates or free text.
            endpoint: Which side of the trip the location describes.

        Returns:
            The resolved point.

        Raises:
            LocationResolutionError: If the location cannot be resolved.
        """
        plan = self.plan(location, endpoint)
        if isinstance(plan, LiteralLocation):
            self._logger.debug(
                "Location given as coordinates",
                extra={"endpoint": endpoint.name, "label": plan.point.label},
            )
            return plan.point

        point = self.lookup(plan.query)
        self._logger.debug(
            "Location geocoded",
            extra={"endpoint": endpoint.name, "label": point.label},
        )
        return point
