"""Nominatim Reverse Geocoder — address mapping and error translation.

Tests cover:
    - Nominatim address keys mapped to AddressResult components
    - Missing address block → None
    - geopy exceptions → GeocodingError with error_type
    - No network: the rate-limited reverse callable is replaced per test
"""

import pytest
from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable

from geobookmarks.core.domain_types import AddressResult
from geobookmarks.core.errors import GeocodingError
from geobookmarks.infrastructure.nominatim_geocoder import (
    NominatimReverseGeocoder, address_from_nominatim,
)


class _Location:
    def __init__(self, raw):
        self.raw = raw


@pytest.fixture
def geocoder():
    return NominatimReverseGeocoder(
        user_agent="geobookmarks-tests/0.0", min_delay_seconds=0,
    )


def test_maps_us_address():
    raw = {"address": {
        "suburb": "Mission District",
        "city": "San Francisco",
        "county": "San Francisco County",
        "state": "California",
        "country": "United States",
    }}
    assert address_from_nominatim(raw) == AddressResult(
        region="California",
        sub_region="San Francisco County",
        locality="San Francisco",
        sub_locality="Mission District",
        country="United States",
    )


def test_maps_alternate_admin_keys():
    raw = {"address": {
        "province": "Ontario",
        "state_district": "Golden Horseshoe",
        "town": "Oakville",
        "neighbourhood": "Glen Abbey",
        "country": "Canada",
    }}
    result = address_from_nominatim(raw)
    assert result.region == "Ontario"
    assert result.sub_region == "Golden Horseshoe"
    assert result.locality == "Oakville"
    assert result.sub_locality == "Glen Abbey"


def test_missing_address_block_is_no_result():
    assert address_from_nominatim({"error": "Unable to geocode"}) is None
    assert address_from_nominatim({}) is None


async def test_lookup_returns_mapped_result(geocoder):
    calls = []

    def fake_reverse(query, **kwargs):
        calls.append((query, kwargs))
        return _Location({"address": {"state": "Nevada", "country": "United States"}})

    geocoder._reverse = fake_reverse
    result = await geocoder.lookup(39.0, -117.0)

    assert result.region == "Nevada"
    assert calls[0][0] == (39.0, -117.0)
    assert calls[0][1]["language"] == "en"
    assert calls[0][1]["exactly_one"] is True


async def test_lookup_without_result_returns_none(geocoder):
    geocoder._reverse = lambda query, **kwargs: None
    assert await geocoder.lookup(0.0, -150.0) is None


@pytest.mark.parametrize("exc, error_type", [
    (GeocoderTimedOut("slow"), "timeout"),
    (GeocoderUnavailable("down"), "service_error"),
    (GeocoderServiceError("500"), "service_error"),
])
async def test_lookup_maps_geopy_errors(geocoder, exc, error_type):
    def failing(query, **kwargs):
        raise exc

    geocoder._reverse = failing
    with pytest.raises(GeocodingError) as info:
        await geocoder.lookup(1.0, 2.0)
    assert info.value.error_type == error_type
    assert info.value.context.debug_info == {"lat": 1.0, "lon": 2.0}
