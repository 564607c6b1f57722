import argparse
import logging
import os
import sys

import pandas as pd

# allow running as `python scripts/resolve_routes_csv.py` from the repo root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from routing import Coordinate, InvalidInputError  # noqa: E402
from routing.factory import build_default_resolver  # noqa: E402
from routing.policy import policy_from_env  # noqa: E402
from route_cache import CacheSweeper, cache_policy_from_env  # noqa: E402

REQUIRED_COLUMNS = ["origin_lat", "origin_lon", "dest_lat", "dest_lon"]


def resolve_frame(df: pd.DataFrame, resolver) -> pd.DataFrame:
    """
    Resolve one route per row and append distance/duration/provider columns.
    Rows with invalid coordinates are kept with empty metrics and provider 'invalid'.
    """
    missing = [column for column in REQUIRED_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns: {', '.join(missing)}")

    distances, durations, providers, confidences = [], [], [], []
    for _, row in df.iterrows():
        origin = Coordinate(lat=row["origin_lat"], lon=row["origin_lon"])
        destination = Coordinate(lat=row["dest_lat"], lon=row["dest_lon"])
        try:
            result = resolver.resolve_route(origin, destination)
        except InvalidInputError:
            distances.append(None)
            durations.append(None)
            providers.append("invalid")
            confidences.append(None)
            continue

        distances.append(round(result.distance_m, 1))
        durations.append(round(result.duration_s, 1))
        providers.append(result.provider.value)
        confidences.append(result.confidence)

    out = df.copy()
    out["distance_m"] = distances
    out["duration_s"] = durations
    out["provider"] = providers
    out["confidence"] = confidences
    return out


def main(argv=None):
    parser = argparse.ArgumentParser(description="Resolve routes for origin/destination pairs in a CSV.")
    parser.add_argument("input", help="CSV with origin_lat, origin_lon, dest_lat, dest_lon columns")
    parser.add_argument("-o", "--output", default="routes_resolved.csv")
    parser.add_argument("--limit", type=int, default=None, help="only resolve the first N rows")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=os.getenv("ROUTING_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    df = pd.read_csv(args.input)
    if args.limit is not None:
        df = df.head(args.limit)

    cache_policy = cache_policy_from_env()
    resolver = build_default_resolver(policy_from_env(), cache_policy)

    sweeper = CacheSweeper(resolver.cache, interval_s=cache_policy.cleanup_interval_s)
    sweeper.start()
    try:
        out = resolve_frame(df, resolver)
    finally:
        sweeper.stop()
    out.to_csv(args.output, index=False)

    print(f"✅ Resolved {len(out)} routes and saved to '{args.output}'")
    print("\nServed by:")
    for name, count in out["provider"].value_counts().items():
        print(f"  {name}: {count}")

    stats = resolver.cache.stats()
    print(f"\nCache: {stats.hits} hits / {stats.misses} misses (hit rate {stats.hit_rate:.0%})")


if __name__ == "__main__":
    main()
