"""Tests for LocationResolver: literal coordinates, parsing and lookups."""

import pytest

from conftest import TIMES_SQUARE, FakeGeocoder
from optiride.domain.errors import GeocodingError, LocationResolutionError, ResolutionFailure
from optiride.domain.models import CoordinateInput, Endpoint, GeocodedPlace, TextInput
from optiride.services.location_resolver import (
    LiteralLocation,
    LocationResolver,
    NeedsLookup,
    parse_lat_lon,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("40.7128,-74.0060", (40.7128, -74.006)),
        ("40.7128, -74.0060", (40.7128, -74.006)),
        ("40.7128 -74.0060", (40.7128, -74.006)),
        ("  -33.8688 ,151.2093 ", (-33.8688, 151.2093)),
        ("+10 20", (10.0, 20.0)),
        (".5,-.5", (0.5, -0.5)),
    ],
)
def test_parse_lat_lon_accepts_pairs(text, expected):
    assert parse_lat_lon(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "Times Square",
        "12 Main Street",
        "40.7128",
        "40.7128,-74.0060,12",
        "95, 10",
        "10, 190",
        "1e5, 2",
        "",
    ],
)
def test_parse_lat_lon_rejects_everything_else(text):
    assert parse_lat_lon(text) is None


class TestPlan:
    """The I/O-free decision between literal points and lookups."""

    def test_coordinates_are_literal_with_endpoint_label(self, geocoder):
        resolver = LocationResolver(geocoder)

        pickup = resolver.plan(CoordinateInput(40.0, -73.0), Endpoint.PICKUP)
        dropoff = resolver.plan(CoordinateInput(41.0, -72.0), Endpoint.DROPOFF)

        assert isinstance(pickup, LiteralLocation)
        assert pickup.point.label == "Current location"
        assert isinstance(dropoff, LiteralLocation)
        assert dropoff.point.label == "Destination"

    def test_coordinate_text_keeps_original_text_as_label(self, geocoder):
        plan = LocationResolver(geocoder).plan(
            TextInput(" 40.7128, -74.0060 "), Endpoint.PICKUP
        )

        assert isinstance(plan, LiteralLocation)
        assert plan.point.latitude == 40.7128
        assert plan.point.longitude == -74.006
        assert plan.point.label == "40.7128, -74.0060"

    def test_address_needs_lookup(self, geocoder):
        plan = LocationResolver(geocoder).plan(TextInput("Times Square"), Endpoint.PICKUP)
        assert plan == NeedsLookup("Times Square")

    def test_blank_text_is_empty_input(self, geocoder):
        with pytest.raises(LocationResolutionError) as exc_info:
            LocationResolver(geocoder).plan(TextInput("   "), Endpoint.DROPOFF)
        assert exc_info.value.reason is ResolutionFailure.EMPTY_INPUT

    def test_out_of_range_coordinates_fail(self, geocoder):
        with pytest.raises(LocationResolutionError):
            LocationResolver(geocoder).plan(CoordinateInput(91.0, 0.0), Endpoint.PICKUP)

    def test_plan_never_calls_geocoder(self, geocoder):
        resolver = LocationResolver(geocoder)
        resolver.plan(TextInput("Times Square"), Endpoint.PICKUP)
        resolver.plan(CoordinateInput(40.0, -73.0), Endpoint.PICKUP)
        assert geocoder.calls == []


class TestResolve:
    def test_literal_coordinates_bypass_geocoder(self, geocoder):
        point = LocationResolver(geocoder).resolve(
            CoordinateInput(40.0, -73.0), Endpoint.PICKUP
        )

        assert (point.latitude, point.longitude) == (40.0, -73.0)
        assert geocoder.calls == []

    def test_address_is_geocoded_once(self, geocoder):
        point = LocationResolver(geocoder).resolve(
            TextInput("Times Square"), Endpoint.PICKUP
        )

        assert point.latitude == TIMES_SQUARE.latitude
        assert point.longitude == TIMES_SQUARE.longitude
        assert point.label == TIMES_SQUARE.display_label
        assert geocoder.calls == ["Times Square"]

    def test_empty_result_is_not_found(self, geocoder):
        with pytest.raises(LocationResolutionError) as exc_info:
            LocationResolver(geocoder).resolve(TextInput("Nowhere at all"), Endpoint.PICKUP)

        assert exc_info.value.reason is ResolutionFailure.NOT_FOUND
        assert geocoder.calls == ["Nowhere at all"]

    def test_upstream_rejection_is_not_found(self):
        geocoder = FakeGeocoder({"Main St": GeocodingError("HTTP 403", query="Main St")})

        with pytest.raises(LocationResolutionError) as exc_info:
            LocationResolver(geocoder).resolve(TextInput("Main St"), Endpoint.PICKUP)

        assert exc_info.value.reason is ResolutionFailure.NOT_FOUND
        assert isinstance(exc_info.value.cause, GeocodingError)

    def test_transport_failure_is_not_retried(self):
        geocoder = FakeGeocoder(
            {"Main St": GeocodingError("timed out", query="Main St", is_transport_error=True)}
        )

        with pytest.raises(LocationResolutionError) as exc_info:
            LocationResolver(geocoder).resolve(TextInput("Main St"), Endpoint.PICKUP)

        assert exc_info.value.reason is ResolutionFailure.TRANSPORT_ERROR
        assert geocoder.calls == ["Main St"]

    def test_missing_display_label_falls_back_to_query(self):
        geocoder = FakeGeocoder({"JFK": GeocodedPlace(40.6413, -73.7781, "")})
        point = LocationResolver(geocoder).resolve(TextInput("JFK"), Endpoint.DROPOFF)
        assert point.label == "JFK"

    def test_invalid_geocoder_coordinates_are_not_found(self):
        geocoder = FakeGeocoder({"Mars": GeocodedPlace(123.0, 0.0, "Mars")})

        with pytest.raises(LocationResolutionError) as exc_info:
            LocationResolver(geocoder).resolve(TextInput("Mars"), Endpoint.DROPOFF)

        assert exc_info.value.reason is ResolutionFailure.NOT_FOUND
