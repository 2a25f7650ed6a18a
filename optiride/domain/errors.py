"""Typed domain errors for the ride comparison pipeline.

All errors inherit from RideCompareError and can optionally wrap a
root cause exception for debugging. ComparisonError subclasses are the
client-facing failures of a comparison request; the HTTP layer turns
them into 400 responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .models import Endpoint


class ResolutionFailure(Enum):
    """Why a location could not be turned into coordinates."""

    EMPTY_INPUT = "empty_input"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


@dataclass
class RideCompareError(Exception):
    """Base error for the ride comparison domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class GeocodingError(RideCompareError):
    """The geocoding service failed to answer a lookup.

    Attributes:
        query: The location query that failed
        is_transport_error: True for timeouts and unreachable services,
            False when the service answered with a non-success status
    """

    query: str = ""
    is_transport_error: bool = False


@dataclass
class LocationResolutionError(RideCompareError):
    """A location descriptor could not be resolved to a point.

    Attributes:
        reason: Failure category
        query: The text that was being resolved, if any
    """

    reason: ResolutionFailure = ResolutionFailure.NOT_FOUND
    query: str = ""


@dataclass
class ComparisonError(RideCompareError):
    """A comparison request failed because of its input."""


@dataclass
class MissingInputError(ComparisonError):
    """Neither text nor coordinates were supplied for one side.

    Attributes:
        endpoint: The side that is missing
    """

    endpoint: Endpoint = Endpoint.PICKUP

    @classmethod
    def for_endpoint(cls, endpoint: Endpoint) -> MissingInputError:
        return cls(
            f"{endpoint.display_name} is required (address or coordinates).",
            endpoint=endpoint,
        )


@dataclass
class GeocodeFailedError(ComparisonError):
    """One or both locations could not be geocoded.

    Attributes:
        endpoint: The first side that failed to resolve
        reason: Failure category reported by the resolver
    """

    endpoint: Optional[Endpoint] = None
    reason: Optional[ResolutionFailure] = None


@dataclass
class ConfigurationError(RideCompareError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class RenderingError(RideCompareError):
    """Map rendering failed.

    Attributes:
        renderer_type: Type of renderer that failed
    """

    renderer_type: str = ""
