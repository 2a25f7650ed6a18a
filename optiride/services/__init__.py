"""Services layer - Application orchestration.

This module contains the pipeline components and the service that
orchestrates them to fulfill a comparison request.

Available services:
- ComparisonService: Main service comparing providers on a trip
- LocationResolver: Text or coordinates to a resolved point
- FareEstimator: Distance to price and ETA
- DeepLinkBuilder: Provider app and web links
- VisitCounter: In-memory page visit counter
"""

from .comparison import ComparisonService, rank_quotes
from .deep_links import DeepLinkBuilder
from .distance import distance_km, haversine_km
from .fare_estimator import FareEstimator, FareSchedule
from .location_resolver import LocationResolver
from .visits import VisitCounter

__all__ = [
    "ComparisonService",
    "DeepLinkBuilder",
    "FareEstimator",
    "FareSchedule",
    "LocationResolver",
    "VisitCounter",
    "distance_km",
    "haversine_km",
    "rank_quotes",
]
