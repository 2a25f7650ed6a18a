"""Immutable domain models for the ride comparison pipeline.

All models are frozen dataclasses with slots. They have no external
dependencies and represent the core business concepts of the
application: where a trip starts and ends, how each provider prices it
and what the comparison returns.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union


class Endpoint(Enum):
    """Which end of the trip a location describes."""

    PICKUP = auto()
    DROPOFF = auto()

    @property
    def display_name(self) -> str:
        """Name used in user-facing error messages."""
        return "Pickup" if self is Endpoint.PICKUP else "Dropoff"

    @property
    def coordinate_label(self) -> str:
        """Label given to a point supplied as literal coordinates."""
        return "Current location" if self is Endpoint.PICKUP else "Destination"


class SortOrder(Enum):
    """Ranking applied to the quotes of a comparison."""

    PRICE = "price"
    ETA = "eta"


def _check_coordinates(latitude: float, longitude: float) -> None:
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValueError(
            f"Coordinates must be finite, got ({latitude}, {longitude})"
        )
    if not -90 <= latitude <= 90:
        raise ValueError(f"Latitude must be between -90 and 90, got {latitude}")
    if not -180 <= longitude <= 180:
        raise ValueError(
            f"Longitude must be between -180 and 180, got {longitude}"
        )


@dataclass(frozen=True, slots=True)
class CoordinateInput:
    """A location given directly as a latitude/longitude pair."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class TextInput:
    """A location given as free text (an address or a "lat, lon" string)."""

    query: str


LocationInput = Union[CoordinateInput, TextInput]


@dataclass(frozen=True, slots=True)
class ResolvedPoint:
    """A geographic coordinate with a display label.

    Attributes:
        latitude: Degrees north, in [-90, 90]
        longitude: Degrees east, in [-180, 180]
        label: Human-readable description of the point
    """

    latitude: float
    longitude: float
    label: str = ""

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        _check_coordinates(self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class GeocodedPlace:
    """Single candidate returned by a forward geocoding lookup."""

    latitude: float
    longitude: float
    display_label: str


@dataclass(frozen=True, slots=True)
class LinkParam:
    """One query parameter of a provider deep link.

    ``value_template`` may reference ``{pickup_lat}``, ``{pickup_lon}``,
    ``{dropoff_lat}`` and ``{dropoff_lon}``; anything else is literal.
    """

    name: str
    value_template: str


@dataclass(frozen=True, slots=True)
class ProviderProfile:
    """Static pricing and linking description of a ride-hailing provider.

    Attributes:
        name: Provider display name (e.g. 'Uber')
        surge_multiplier: Scalar applied to the shared fare formula
        eta_divisor_km_per_minute: Average speed used to derive the ETA
        app_link_template: URL opening the native app, with a ``{query}`` slot
        web_link_template: Browser fallback URL, with a ``{query}`` slot
        link_params: Ordered query parameters shared by both links
    """

    name: str
    surge_multiplier: float
    eta_divisor_km_per_minute: float
    app_link_template: str
    web_link_template: str
    link_params: tuple[LinkParam, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.surge_multiplier <= 0:
            raise ValueError(
                f"Surge multiplier must be positive, got {self.surge_multiplier}"
            )
        if self.eta_divisor_km_per_minute <= 0:
            raise ValueError(
                "ETA divisor must be positive, "
                f"got {self.eta_divisor_km_per_minute}"
            )


@dataclass(frozen=True, slots=True)
class FareEstimate:
    """Price and arrival estimate for one provider."""

    estimate_usd: float
    eta_minutes: int


@dataclass(frozen=True, slots=True)
class DeepLinks:
    """App-opening URL and its web fallback."""

    app_link: str
    web_link: str


@dataclass(frozen=True, slots=True)
class FareQuote:
    """A provider's estimate together with the links to book the trip."""

    provider: str
    estimate_usd: float
    eta_minutes: int
    deep_link: str
    web_link: str


@dataclass(frozen=True, slots=True)
class ComparisonRequest:
    """Both trip endpoints as submitted by the caller.

    Each side may carry text, coordinates, both or neither; coordinates
    win when both are present.
    """

    pickup_text: Optional[str] = None
    dropoff_text: Optional[str] = None
    pickup_coordinates: Optional[CoordinateInput] = None
    dropoff_coordinates: Optional[CoordinateInput] = None
    sort_order: SortOrder = SortOrder.PRICE

    def location_for(self, endpoint: Endpoint) -> Optional[LocationInput]:
        """Return the effective input for one side, or None if missing."""
        if endpoint is Endpoint.PICKUP:
            coords, text = self.pickup_coordinates, self.pickup_text
        else:
            coords, text = self.dropoff_coordinates, self.dropoff_text

        if coords is not None:
            return coords
        if text is not None and text.strip():
            return TextInput(text.strip())
        return None


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Outcome of a comparison request.

    Attributes:
        origin: Resolved pickup point
        destination: Resolved dropoff point
        distance_km: Great-circle distance between the two points
        results: Quotes ranked according to the requested sort order
        currency: Currency of every estimate
    """

    origin: ResolvedPoint
    destination: ResolvedPoint
    distance_km: float
    results: tuple[FareQuote, ...] = field(default_factory=tuple)
    currency: str = "USD"
