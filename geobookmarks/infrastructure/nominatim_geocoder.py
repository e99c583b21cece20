"""Nominatim Reverse Geocoder — ReverseGeocoder implementation over geopy.

Invariants:
    - One HTTP request per lookup(); no retries (max_retries=0 on the rate limiter)
    - Requests spaced by geocoder_min_delay_seconds (Nominatim usage policy)
    - No result → None; transport/service failures → GeocodingError
    - Blocking geopy calls run in a worker thread, never on the event loop

Design Decisions:
    - geopy's RateLimiter over a hand-rolled throttle: thread-safe, already handles spacing
    - Address mapping keeps the first populated Nominatim key per component, because
      Nominatim names the same admin level differently per country (state/province/region)
"""

import asyncio
import logging
from typing import Any

from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeopyError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from geobookmarks.core.domain_types import AddressResult
from geobookmarks.core.errors import ErrorContext, GeocodingError

logger = logging.getLogger(__name__)

_REGION_KEYS = ("state", "province", "region")
_SUB_REGION_KEYS = ("county", "state_district")
_LOCALITY_KEYS = ("city", "town", "village", "municipality", "hamlet")
_SUB_LOCALITY_KEYS = ("suburb", "neighbourhood", "quarter", "city_district", "borough")


def _first(address: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = address.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def address_from_nominatim(raw: dict[str, Any]) -> AddressResult | None:
    """Map a Nominatim reverse payload to AddressResult (None when no address block)."""
    address = raw.get("address") if raw else None
    if not address:
        return None
    return AddressResult(
        region=_first(address, _REGION_KEYS),
        sub_region=_first(address, _SUB_REGION_KEYS),
        locality=_first(address, _LOCALITY_KEYS),
        sub_locality=_first(address, _SUB_LOCALITY_KEYS),
        country=_first(address, ("country",)),
    )


class NominatimReverseGeocoder:
    """Reverse geocoding via OpenStreetMap Nominatim."""

    def __init__(
        self,
        user_agent: str,
        domain: str = "nominatim.openstreetmap.org",
        language: str = "en",
        timeout_seconds: float | None = None,
        min_delay_seconds: float = 1.0,
    ):
        self._geocoder = Nominatim(
            user_agent=user_agent, domain=domain, timeout=timeout_seconds,
        )
        self._reverse = RateLimiter(
            self._geocoder.reverse,
            min_delay_seconds=min_delay_seconds,
            max_retries=0,
            swallow_exceptions=False,
        )
        self.language = language

    async def lookup(self, lat: float, lon: float) -> AddressResult | None:
        try:
            location = await asyncio.to_thread(
                self._reverse, (lat, lon),
                exactly_one=True, language=self.language, addressdetails=True,
            )
        except GeocoderTimedOut as e:
            raise GeocodingError(str(e), "timeout", context=_context(lat, lon))
        except GeocoderServiceError as e:
            raise GeocodingError(str(e), "service_error", context=_context(lat, lon))
        except GeopyError as e:
            raise GeocodingError(str(e), "unknown", context=_context(lat, lon))
        if location is None:
            logger.debug(f"No reverse geocoding result for ({lat:.5f}, {lon:.5f})")
            return None
        return address_from_nominatim(location.raw)


def _context(lat: float, lon: float) -> ErrorContext:
    return ErrorContext(debug_info={"lat": lat, "lon": lon})
