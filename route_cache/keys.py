DEFAULT_PRECISION = 4
ANY_PROVIDER = "any"


def _normalize(value: float, precision: int) -> str:
    # + 0.0 folds -0.0 into 0.0 so tiny negative noise can't split keys
    rounded = round(float(value), precision) + 0.0
    return f"{rounded:.{precision}f}"


def make_cache_key(
    origin,
    destination,
    provider: str = ANY_PROVIDER,
    precision: int = DEFAULT_PRECISION,
) -> str:
    """
    Key for a route query: '{provider}:{lat},{lon}|{lat},{lon}'.

    Coordinates are rounded to `precision` decimals (4 is about 11 m), so two
    queries differing only beyond that share a cache entry.
    """
    origin_part = f"{_normalize(origin.lat, precision)},{_normalize(origin.lon, precision)}"
    destination_part = f"{_normalize(destination.lat, precision)},{_normalize(destination.lon, precision)}"
    return f"{provider}:{origin_part}|{destination_part}"
