"""Place Names — pure selection rules turning address results into display names.

Invariants:
    - Empty strings count as absent at every step
    - Coarse keys (length <= 2) sample at most 5 points and keep at most 2 distinct names
    - Two names compose as "<first> and <second>", in discovery order
    - Field precedence for finer keys is keyed by length, not by level label
      (length 7 is labelled "block" but uses the neighborhood precedence)

Design Decisions:
    - Separated from services/name_resolver.py: the resolver does IO, this module only decides
    - Precedence as data (tuple of attribute names): one lookup path for every length
"""

from geobookmarks.core.domain_types import AddressResult, Bounds

MAX_REGION_NAMES = 2

# Field precedence by key length (checked top-down, first match wins)
_PRECEDENCE_COARSE = ("region", "country")
_PRECEDENCE_PROVINCE = ("region", "sub_region", "country")
_PRECEDENCE_CITY = ("locality", "sub_region", "region")
_PRECEDENCE_NEIGHBORHOOD = ("sub_locality", "locality", "region")
_PRECEDENCE_BLOCK = ("sub_locality", "locality", "region", "country")


def _field_precedence(length: int) -> tuple[str, ...]:
    if length <= 2:
        return _PRECEDENCE_COARSE
    if length <= 4:
        return _PRECEDENCE_PROVINCE
    if length == 5:
        return _PRECEDENCE_CITY
    if length <= 7:
        return _PRECEDENCE_NEIGHBORHOOD
    return _PRECEDENCE_BLOCK


def _first_present(address: AddressResult, fields: tuple[str, ...]) -> str | None:
    for name in fields:
        value = getattr(address, name)
        if value:
            return value
    return None


def pick_name_for_length(length: int, address: AddressResult | None) -> str | None:
    """Select the display field for a key of the given length."""
    if address is None:
        return None
    return _first_present(address, _field_precedence(length))


def region_name(address: AddressResult | None) -> str | None:
    """Region-level field for one sampled point, falling back to country."""
    return pick_name_for_length(1, address)


def sample_points(bounds: Bounds) -> list[tuple[float, float]]:
    """Center first, then the four corners: min/min, min/max, max/min, max/max."""
    return [
        bounds.center,
        (bounds.lat_min, bounds.lon_min),
        (bounds.lat_min, bounds.lon_max),
        (bounds.lat_max, bounds.lon_min),
        (bounds.lat_max, bounds.lon_max),
    ]


def compose_region_names(names: list[str]) -> str | None:
    if not names:
        return None
    if len(names) == 1:
        return names[0]
    return f"{names[0]} and {names[1]}"
