"""Domain layer - Core business models and errors.

This module contains immutable domain models, typed errors and the
provider table used throughout the application. No external
dependencies.
"""

from .errors import (
    ComparisonError,
    ConfigurationError,
    GeocodeFailedError,
    GeocodingError,
    LocationResolutionError,
    MissingInputError,
    RenderingError,
    ResolutionFailure,
    RideCompareError,
)
from .models import (
    ComparisonRequest,
    ComparisonResult,
    CoordinateInput,
    DeepLinks,
    Endpoint,
    FareEstimate,
    FareQuote,
    GeocodedPlace,
    LinkParam,
    LocationInput,
    ProviderProfile,
    ResolvedPoint,
    SortOrder,
    TextInput,
)
from .providers import DEFAULT_PROVIDERS, PROVIDERS, select_providers

__all__ = [
    # Models
    "ComparisonRequest",
    "ComparisonResult",
    "CoordinateInput",
    "DeepLinks",
    "Endpoint",
    "FareEstimate",
    "FareQuote",
    "GeocodedPlace",
    "LinkParam",
    "LocationInput",
    "ProviderProfile",
    "ResolvedPoint",
    "SortOrder",
    "TextInput",
    # Providers
    "DEFAULT_PROVIDERS",
    "PROVIDERS",
    "select_providers",
    # Errors
    "RideCompareError",
    "ComparisonError",
    "MissingInputError",
    "GeocodeFailedError",
    "GeocodingError",
    "LocationResolutionError",
    "ResolutionFailure",
    "ConfigurationError",
    "RenderingError",
]
