"""Comparison service - Main orchestrator.

Drives the whole pipeline for one request:

1. Validate that both sides carry text or coordinates
2. Resolve pickup and dropoff (concurrently)
3. Measure the great-circle distance once
4. Quote every configured provider
5. Rank the quotes

A request either gets a quote from every provider or fails as a whole.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Sequence

from ..domain.errors import (
    GeocodeFailedError,
    LocationResolutionError,
    MissingInputError,
)
from ..domain.models import (
    ComparisonRequest,
    ComparisonResult,
    Endpoint,
    FareQuote,
    LocationInput,
    ProviderProfile,
    ResolvedPoint,
    SortOrder,
)
from ..domain.providers import DEFAULT_PROVIDERS
from .deep_links import DeepLinkBuilder
from .distance import distance_km
from .fare_estimator import FareEstimator
from .location_resolver import LocationResolver


def rank_quotes(
    quotes: Sequence[FareQuote], order: SortOrder = SortOrder.PRICE
) -> tuple[FareQuote, ...]:
    """Sort quotes by price or ETA; ties keep their original order."""
    if order is SortOrder.ETA:
        return tuple(sorted(quotes, key=lambda q: q.eta_minutes))
    return tuple(sorted(quotes, key=lambda q: q.estimate_usd))


@dataclass
class ComparisonService:
    """Main service for comparing ride providers on a trip.

    Attributes:
        resolver: Turns location descriptors into points
        fare_estimator: Prices a distance for a provider
        link_builder: Builds provider deep links
        providers: Providers to quote, in declaration order
        currency: Currency of every estimate
        resolve_concurrently: Resolve pickup and dropoff on two threads
    """

    resolver: LocationResolver
    fare_estimator: FareEstimator = field(default_factory=FareEstimator)
    link_builder: DeepLinkBuilder = field(default_factory=DeepLinkBuilder)
    providers: tuple[ProviderProfile, ...] = DEFAULT_PROVIDERS
    currency: str = "USD"
    resolve_concurrently: bool = True

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def compare(self, request: ComparisonRequest) -> ComparisonResult:
        """Compare every provider on the requested trip.

        Args:
            request: Pickup and dropoff as text and/or coordinates.

        Returns:
            ComparisonResult with one quote per provider, ranked.

        Raises:
            MissingInputError: If a side has neither text nor coordinates.
            GeocodeFailedError: If a side cannot be resolved.
        """
        pickup = request.location_for(Endpoint.PICKUP)
        if pickup is None:
            raise MissingInputError.for_endpoint(Endpoint.PICKUP)
        dropoff = request.location_for(Endpoint.DROPOFF)
        if dropoff is None:
            raise MissingInputError.for_endpoint(Endpoint.DROPOFF)

        origin, destination = self._resolve_both(pickup, dropoff)

        distance = distance_km(origin, destination)
        self._logger.info(
            "Trip measured",
            extra={
                "origin": origin.label,
                "destination": destination.label,
                "distance_km": round(distance, 3),
            },
        )

        quotes = [
            self.quote(profile, origin, destination, distance)
            for profile in self.providers
        ]
        ranked = rank_quotes(quotes, request.sort_order)

        return ComparisonResult(
            origin=origin,
            destination=destination,
            distance_km=distance,
            results=ranked,
            currency=self.currency,
        )

    def quote(
        self,
        profile: ProviderProfile,
        origin: ResolvedPoint,
        destination: ResolvedPoint,
        distance: float,
    ) -> FareQuote:
        """Price and link one provider for an already measured trip."""
        estimate = self.fare_estimator.estimate(distance, profile)
        links = self.link_builder.build_links(profile, origin, destination)
        return FareQuote(
            provider=profile.name,
            estimate_usd=estimate.estimate_usd,
            eta_minutes=estimate.eta_minutes,
            deep_link=links.app_link,
            web_link=links.web_link,
        )

    def _resolve_both(
        self, pickup: LocationInput, dropoff: LocationInput
    ) -> tuple[ResolvedPoint, ResolvedPoint]:
        try:
            if self.resolve_concurrently:
                with ThreadPoolExecutor(max_workers=2) as pool:
                    pickup_future = pool.submit(self._resolve, pickup, Endpoint.PICKUP)
                    dropoff_future = pool.submit(self._resolve, dropoff, Endpoint.DROPOFF)
                    return pickup_future.result(), dropoff_future.result()
            return (
                self._resolve(pickup, Endpoint.PICKUP),
                self._resolve(dropoff, Endpoint.DROPOFF),
            )
        except _EndpointResolutionError as e:
            self._logger.warning(
                "Location resolution failed",
                extra={
                    "endpoint": e.endpoint.name,
                    "reason": e.error.reason.value,
                    "query": e.error.query,
                },
            )
            raise GeocodeFailedError(
                "Could not geocode one or both locations.",
                cause=e.error,
                endpoint=e.endpoint,
                reason=e.error.reason,
            ) from e.error

    def _resolve(self, location: LocationInput, endpoint: Endpoint) -> ResolvedPoint:
        try:
            return self.resolver.resolve(location, endpoint)
        except LocationResolutionError as e:
            raise _EndpointResolutionError(endpoint, e) from e


class _EndpointResolutionError(Exception):
    """Carries the failing side out of a worker thread."""

    def __init__(self, endpoint: Endpoint, error: LocationResolutionError) -> None:
        super().__init__(str(error))
        self.endpoint = endpoint
        self.error = error
