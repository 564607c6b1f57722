import logging

from routing import Coordinate
from routing.factory import build_default_resolver
from routing.policy import policy_from_env
from route_cache import CachePolicy


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # memory tier only so repeated runs really hit the network
    resolver = build_default_resolver(policy_from_env(), CachePolicy(enable_persistent=False))

    origin = Coordinate(48.7758, 9.1829)   # Stuttgart (lat, lon)
    destinations = [
        Coordinate(49.0069, 8.4037),       # Karlsruhe
        Coordinate(48.4011, 9.9876),       # Ulm
        Coordinate(49.4875, 8.4660),       # Mannheim
    ]

    results = resolver.resolve_many(origin, destinations, max_workers=3)

    print(f"\nResolved {len(results)} routes:\n")
    for destination, route in zip(destinations, results):
        print(
            f"-> ({destination.lat}, {destination.lon}): "
            f"{route.distance_km:.1f} km, {route.duration_s / 60:.0f} min "
            f"via {route.provider.value} (confidence {route.confidence})"
        )

    # second pass should be served entirely from the cache
    again = resolver.resolve_route(origin, destinations[0])
    print(f"\nRepeat query served by: {again.provider.value}")
    print(f"Provider stats: {resolver.provider_stats()}")


if __name__ == "__main__":
    main()
