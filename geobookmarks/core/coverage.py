"""Coverage — approximate cell size label for a geohash length.

Invariants:
    - Values are the max cell dimension at the equator, in meters
    - Label format: "~<km> km", 0 decimals at >= 100 km, 1 decimal otherwise
"""

_MAX_METERS_BY_LENGTH: dict[int, float] = {
    2: 1_250_000.0,
    3: 156_000.0,
    4: 39_100.0,
    5: 4_890.0,
    6: 1_220.0,
    7: 153.0,
    8: 38.2,
    9: 4.77,
    10: 1.19,
}


def coverage_meters(length: int) -> float:
    if length in _MAX_METERS_BY_LENGTH:
        return _MAX_METERS_BY_LENGTH[length]
    if length <= 1:
        return 5_000_000.0
    return 1.19 * 0.25 ** (length - 10)


def coverage_label(length: int) -> str:
    km = coverage_meters(length) / 1000.0
    if km >= 100:
        return f"~{km:.0f} km"
    return f"~{km:.1f} km"
