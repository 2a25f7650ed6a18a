"""Provider table.

Each provider is pure data: a surge multiplier, an average speed for
the ETA and the shape of its deep links. Adding a provider means adding
an entry here and enabling it in ``PricingConfig.providers``.
"""

from __future__ import annotations

from typing import Dict, Iterable

from .errors import ConfigurationError
from .models import LinkParam, ProviderProfile

UBER = ProviderProfile(
    name="Uber",
    surge_multiplier=1.0,
    eta_divisor_km_per_minute=0.8,
    # Universal link: opens the app when installed, the mobile site otherwise.
    app_link_template="https://m.uber.com/ul/?{query}",
    web_link_template="https://m.uber.com/ul/?{query}",
    link_params=(
        LinkParam("action", "setPickup"),
        LinkParam("pickup[latitude]", "{pickup_lat}"),
        LinkParam("pickup[longitude]", "{pickup_lon}"),
        LinkParam("dropoff[latitude]", "{dropoff_lat}"),
        LinkParam("dropoff[longitude]", "{dropoff_lon}"),
    ),
)

LYFT = ProviderProfile(
    name="Lyft",
    surge_multiplier=0.95,
    eta_divisor_km_per_minute=0.75,
    app_link_template="lyft://ridetype?{query}",
    web_link_template="https://ride.lyft.com/?{query}",
    link_params=(
        LinkParam("id", "lyft"),
        LinkParam("pickup[latitude]", "{pickup_lat}"),
        LinkParam("pickup[longitude]", "{pickup_lon}"),
        LinkParam("destination[latitude]", "{dropoff_lat}"),
        LinkParam("destination[longitude]", "{dropoff_lon}"),
    ),
)

PROVIDERS: Dict[str, ProviderProfile] = {p.name: p for p in (UBER, LYFT)}

DEFAULT_PROVIDERS: tuple[ProviderProfile, ...] = tuple(PROVIDERS.values())


def select_providers(names: Iterable[str]) -> tuple[ProviderProfile, ...]:
    """Look up providers by name, keeping the order given.

    Raises:
        ConfigurationError: If a name is unknown or nothing is selected.
    """
    selected = []
    for name in names:
        profile = PROVIDERS.get(name)
        if profile is None:
            raise ConfigurationError(
                f"Unknown provider {name!r}",
                setting_name="pricing.providers",
                expected_type=" | ".join(PROVIDERS),
            )
        selected.append(profile)

    if not selected:
        raise ConfigurationError(
            "At least one provider must be enabled",
            setting_name="pricing.providers",
        )
    return tuple(selected)
