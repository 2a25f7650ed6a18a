"""Fare and ETA estimation.

Every provider shares one fare formula; only the surge multiplier and
the average speed used for the ETA differ:

    estimate = round_cents((base_fare + km * per_km_rate + booking_fee) * surge)
    eta      = max(min_eta, round(km / km_per_minute))

Rounding is half-up on the binary float value, so a product that lands
just below a .xx5 boundary in binary rounds down.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from ..config import PricingConfig
from ..domain.models import FareEstimate, ProviderProfile


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round to ``ndigits`` decimals, ties going up."""
    scale = 10**ndigits
    return math.floor(value * scale + 0.5) / scale


@dataclass(frozen=True, slots=True)
class FareSchedule:
    """Constants of the shared fare formula."""

    base_fare: float = 2.0
    per_km_rate: float = 1.2
    booking_fee: float = 1.0
    min_eta_minutes: int = 2

    @classmethod
    def from_config(cls, config: PricingConfig) -> FareSchedule:
        return cls(
            base_fare=config.base_fare,
            per_km_rate=config.per_km_rate,
            booking_fee=config.booking_fee,
            min_eta_minutes=config.min_eta_minutes,
        )


@dataclass
class FareEstimator:
    """Maps a trip distance and a provider profile to a price and an ETA.

    Attributes:
        schedule: Fare formula constants
    """

    schedule: FareSchedule = field(default_factory=FareSchedule)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def price_usd(self, distance_km: float, surge_multiplier: float = 1.0) -> float:
        """Return the fare in dollars, rounded to the cent."""
        raw = (
            self.schedule.base_fare
            + distance_km * self.schedule.per_km_rate
            + self.schedule.booking_fee
        ) * surge_multiplier
        return round_half_up(raw, 2)

    def eta_minutes(self, distance_km: float, km_per_minute: float) -> int:
        """Return the pickup-to-dropoff time in whole minutes."""
        minutes = int(round_half_up(distance_km / km_per_minute))
        return max(self.schedule.min_eta_minutes, minutes)

    def estimate(self, distance_km: float, profile: ProviderProfile) -> FareEstimate:
        """Estimate price and ETA of a trip for one provider.

        Args:
            distance_km: Trip distance, must be non-negative.
            profile: Provider pricing profile.

        Returns:
            The provider's FareEstimate.

        Raises:
            ValueError: If the distance is negative or not finite.
        """
        if not math.isfinite(distance_km) or distance_km < 0:
            raise ValueError(f"Distance must be a non-negative number, got {distance_km}")

        estimate = FareEstimate(
            estimate_usd=self.price_usd(distance_km, profile.surge_multiplier),
            eta_minutes=self.eta_minutes(distance_km, profile.eta_divisor_km_per_minute),
        )
        self._logger.debug(
            "Fare estimated",
            extra={
                "provider": profile.name,
                "distance_km": distance_km,
                "estimate_usd": estimate.estimate_usd,
                "eta_minutes": estimate.eta_minutes,
            },
        )
        return estimate
