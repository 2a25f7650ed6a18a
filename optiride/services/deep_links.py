"""Provider deep link construction.

Links are assembled from each provider's profile: its ordered query
parameters are form-encoded (``[`` and ``]`` percent-encoded) and the
resulting query string is substituted into the app and web templates.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from urllib.parse import urlencode

from ..domain.models import DeepLinks, ProviderProfile, ResolvedPoint


def format_coordinate(value: float) -> str:
    """Shortest decimal form of a coordinate, without a trailing ``.0``.

    Matches the usual browser number formatting: plain decimals down to
    1e-6, below that an exponent without zero padding (``1e-7``).
    """
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    if abs(value) >= 1e-6:
        return format(Decimal(text), "f")
    mantissa, _, exponent = text.partition("e")
    return f"{mantissa}e-{abs(int(exponent))}"


@dataclass(frozen=True)
class DeepLinkBuilder:
    """Builds app and web links that open a provider pre-filled with a trip."""

    def query_string(
        self,
        profile: ProviderProfile,
        origin: ResolvedPoint,
        destination: ResolvedPoint,
    ) -> str:
        values = {
            "pickup_lat": format_coordinate(origin.latitude),
            "pickup_lon": format_coordinate(origin.longitude),
            "dropoff_lat": format_coordinate(destination.latitude),
            "dropoff_lon": format_coordinate(destination.longitude),
        }
        return urlencode(
            [(p.name, p.value_template.format(**values)) for p in profile.link_params]
        )

    def build_links(
        self,
        profile: ProviderProfile,
        origin: ResolvedPoint,
        destination: ResolvedPoint,
    ) -> DeepLinks:
        """Return the app link and web fallback for a trip.

        Args:
            profile: Provider whose link formats are used.
            origin: Pickup point.
            destination: Dropoff point.

        Returns:
            DeepLinks for the provider.
        """
        query = self.query_string(profile, origin, destination)
        return DeepLinks(
            app_link=profile.app_link_template.format(query=query),
            web_link=profile.web_link_template.format(query=query),
        )
