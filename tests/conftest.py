"""Shared fixtures: an in-memory geocoder and a container wired to it."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

import pytest

from optiride.config import AppConfig, reset_config
from optiride.container import Container, reset_container
from optiride.domain.models import GeocodedPlace
from optiride.ports.geocoding import GeocoderPort
from optiride.services import ComparisonService


class FakeGeocoder:
    """GeocoderPort double answering from a dict and recording calls."""

    def __init__(
        self,
        places: Optional[Dict[str, Union[GeocodedPlace, Exception]]] = None,
        reverse_result: Union[str, None, Exception] = None,
    ) -> None:
        self.places = places or {}
        self.reverse_result = reverse_result
        self.calls: List[str] = []
        self.reverse_calls: List[tuple[float, float]] = []

    def geocode(self, query: str) -> Optional[GeocodedPlace]:
        self.calls.append(query)
        answer = self.places.get(query)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def reverse(self, latitude: float, longitude: float) -> Optional[str]:
        self.reverse_calls.append((latitude, longitude))
        if isinstance(self.reverse_result, Exception):
            raise self.reverse_result
        return self.reverse_result


TIMES_SQUARE = GeocodedPlace(
    latitude=40.758,
    longitude=-73.9855,
    display_label="Times Square, Manhattan, New York, USA",
)
JFK = GeocodedPlace(
    latitude=40.6413,
    longitude=-73.7781,
    display_label="John F. Kennedy International Airport, Queens, New York, USA",
)


@pytest.fixture(autouse=True)
def _fresh_globals():
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder({"Times Square": TIMES_SQUARE, "JFK Airport": JFK})


@pytest.fixture
def container(geocoder: FakeGeocoder) -> Container:
    container = Container.create_default(AppConfig())
    container.register(GeocoderPort, lambda: geocoder)
    return container


@pytest.fixture
def service(container: Container) -> ComparisonService:
    return container.resolve(ComparisonService)
