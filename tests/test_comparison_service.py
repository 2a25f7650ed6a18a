"""Tests for ComparisonService orchestration."""

from unittest.mock import MagicMock

import pytest

from conftest import FakeGeocoder
from optiride.domain.errors import (
    GeocodeFailedError,
    GeocodingError,
    MissingInputError,
    ResolutionFailure,
)
from optiride.domain.models import (
    ComparisonRequest,
    CoordinateInput,
    Endpoint,
    FareQuote,
    ProviderProfile,
    SortOrder,
)
from optiride.domain.providers import LYFT, UBER
from optiride.services import ComparisonService, LocationResolver, rank_quotes
from optiride.services.fare_estimator import round_half_up


def _quote(provider: str, price: float, eta: int = 5) -> FareQuote:
    return FareQuote(provider, price, eta, f"{provider}://app", f"https://{provider}")


class TestRankQuotes:
    def test_cheapest_first(self):
        ranked = rank_quotes([_quote("A", 5.10), _quote("B", 3.20)])
        assert [q.estimate_usd for q in ranked] == [3.20, 5.10]

    def test_ties_keep_provider_order(self):
        ranked = rank_quotes([_quote("A", 4.0), _quote("B", 2.0), _quote("C", 4.0)])
        assert [q.provider for q in ranked] == ["B", "A", "C"]

    def test_fastest_first(self):
        ranked = rank_quotes(
            [_quote("A", 1.0, eta=9), _quote("B", 2.0, eta=3), _quote("C", 3.0, eta=9)],
            SortOrder.ETA,
        )
        assert [q.provider for q in ranked] == ["B", "A", "C"]


class TestValidation:
    def test_missing_both_names_pickup(self, service, geocoder):
        with pytest.raises(MissingInputError) as exc_info:
            service.compare(ComparisonRequest())

        assert exc_info.value.endpoint is Endpoint.PICKUP
        assert "Pickup" in exc_info.value.message
        assert geocoder.calls == []

    def test_missing_dropoff(self, service, geocoder):
        with pytest.raises(MissingInputError) as exc_info:
            service.compare(ComparisonRequest(pickup_text="Times Square", dropoff_text="  "))

        assert exc_info.value.endpoint is Endpoint.DROPOFF
        assert "Dropoff" in exc_info.value.message
        assert geocoder.calls == []

    def test_coordinates_satisfy_a_side_without_text(self, service):
        result = service.compare(
            ComparisonRequest(
                pickup_coordinates=CoordinateInput(40.7128, -74.006),
                dropoff_text="Times Square",
            )
        )
        assert result.origin.label == "Current location"


class TestCompare:
    def test_end_to_end_with_coordinate_text(self, service, geocoder):
        result = service.compare(
            ComparisonRequest(pickup_text="40.7128,-74.0060", dropoff_text="40.7306,-73.9352")
        )

        assert geocoder.calls == []
        assert result.origin.label == "40.7128,-74.0060"
        assert result.destination.label == "40.7306,-73.9352"
        assert result.distance_km == pytest.approx(6.29, abs=0.01)
        assert result.currency == "USD"

        by_provider = {q.provider: q for q in result.results}
        d = result.distance_km
        assert by_provider["Uber"].estimate_usd == round_half_up((2.0 + d * 1.2 + 1.0) * 1.0, 2)
        assert by_provider["Lyft"].estimate_usd == round_half_up((2.0 + d * 1.2 + 1.0) * 0.95, 2)
        assert by_provider["Uber"].estimate_usd == 10.54
        assert by_provider["Lyft"].estimate_usd == 10.02
        assert [q.provider for q in result.results] == ["Lyft", "Uber"]

    def test_coordinates_win_over_text(self, service, geocoder):
        result = service.compare(
            ComparisonRequest(
                pickup_text="Times Square",
                dropoff_text="JFK Airport",
                pickup_coordinates=CoordinateInput(40.0, -73.0),
            )
        )

        assert geocoder.calls == ["JFK Airport"]
        assert (result.origin.latitude, result.origin.longitude) == (40.0, -73.0)

    def test_every_provider_is_quoted(self, service):
        result = service.compare(
            ComparisonRequest(pickup_text="Times Square", dropoff_text="JFK Airport")
        )

        assert sorted(q.provider for q in result.results) == ["Lyft", "Uber"]
        assert all(q.eta_minutes >= 2 for q in result.results)
        assert all(q.deep_link and q.web_link for q in result.results)

    def test_same_point_twice(self, service):
        result = service.compare(
            ComparisonRequest(pickup_text="Times Square", dropoff_text="Times Square")
        )

        assert result.distance_km == 0
        assert [q.eta_minutes for q in result.results] == [2, 2]

    def test_sort_by_eta(self, service):
        result = service.compare(
            ComparisonRequest(
                pickup_text="Times Square",
                dropoff_text="JFK Airport",
                sort_order=SortOrder.ETA,
            )
        )
        etas = [q.eta_minutes for q in result.results]
        assert etas == sorted(etas)

    def test_unknown_address_fails_whole_request(self, service):
        with pytest.raises(GeocodeFailedError) as exc_info:
            service.compare(ComparisonRequest(pickup_text="Times Square", dropoff_text="Atlantis"))

        assert exc_info.value.endpoint is Endpoint.DROPOFF
        assert exc_info.value.reason is ResolutionFailure.NOT_FOUND

    def test_transport_error_folds_into_geocode_failed(self):
        geocoder = FakeGeocoder(
            {"Main St": GeocodingError("timed out", query="Main St", is_transport_error=True)}
        )
        service = ComparisonService(resolver=LocationResolver(geocoder))

        with pytest.raises(GeocodeFailedError) as exc_info:
            service.compare(ComparisonRequest(pickup_text="Main St", dropoff_text="1, 2"))

        assert exc_info.value.reason is ResolutionFailure.TRANSPORT_ERROR
        assert geocoder.calls == ["Main St"]

    @pytest.mark.parametrize("concurrent", [True, False])
    def test_sequential_and_concurrent_agree(self, geocoder, concurrent):
        service = ComparisonService(
            resolver=LocationResolver(geocoder), resolve_concurrently=concurrent
        )
        result = service.compare(
            ComparisonRequest(pickup_text="Times Square", dropoff_text="JFK Airport")
        )

        assert result.origin.label.startswith("Times Square")
        assert result.destination.label.startswith("John F. Kennedy")
        assert sorted(geocoder.calls) == ["JFK Airport", "Times Square"]

    def test_unexpected_fault_propagates(self, geocoder):
        estimator = MagicMock()
        estimator.estimate.side_effect = RuntimeError("boom")
        service = ComparisonService(resolver=LocationResolver(geocoder), fare_estimator=estimator)

        with pytest.raises(RuntimeError):
            service.compare(ComparisonRequest(pickup_text="1, 2", dropoff_text="3, 4"))

    def test_provider_declaration_order_breaks_ties(self, geocoder):
        twin = ProviderProfile(
            name="UberTwin",
            surge_multiplier=UBER.surge_multiplier,
            eta_divisor_km_per_minute=UBER.eta_divisor_km_per_minute,
            app_link_template=UBER.app_link_template,
            web_link_template=UBER.web_link_template,
            link_params=UBER.link_params,
        )
        service = ComparisonService(
            resolver=LocationResolver(geocoder), providers=(twin, LYFT, UBER)
        )
        result = service.compare(ComparisonRequest(pickup_text="1, 2", dropoff_text="1.1, 2.1"))

        assert [q.provider for q in result.results] == ["Lyft", "UberTwin", "Uber"]
