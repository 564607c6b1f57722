import numpy as np
import pandas as pd


def generate_mock_queries(num_queries=200, num_hubs=10, output_file="route_queries_generated.csv", seed=None):
    """
    Generates origin/destination pairs for exercising the route resolver.
    Origins are drawn from a handful of fixed 'hubs' and a share of queries
    repeat an earlier pair with sub-meter jitter, so the cache key rounding
    gets real hits.
    """
    rng = np.random.default_rng(seed)

    # Center around Stuttgart
    CENTER_LAT = 48.7758
    CENTER_LON = 9.1829

    # 1. Fixed hubs (origins) within ~10km
    hubs = [
        (CENTER_LAT + rng.uniform(-0.1, 0.1), CENTER_LON + rng.uniform(-0.1, 0.1))
        for _ in range(num_hubs)
    ]

    data = []

    # 2. Generate queries
    for query_index in range(num_queries):
        if data and rng.random() < 0.2:
            # repeat an earlier pair, jitter well below 4-decimal precision
            previous = data[rng.integers(0, len(data))]
            jitter = rng.uniform(-1e-6, 1e-6, size=4)
            data.append({
                "query_id": f"q_{str(query_index + 1).zfill(6)}",
                "origin_lat": previous["origin_lat"] + jitter[0],
                "origin_lon": previous["origin_lon"] + jitter[1],
                "dest_lat": previous["dest_lat"] + jitter[2],
                "dest_lon": previous["dest_lon"] + jitter[3],
            })
            continue

        hub_lat, hub_lon = hubs[rng.integers(0, num_hubs)]

        # destination within ~5-30km of the hub
        data.append({
            "query_id": f"q_{str(query_index + 1).zfill(6)}",
            "origin_lat": np.round(hub_lat, 6),
            "origin_lon": np.round(hub_lon, 6),
            "dest_lat": np.round(hub_lat + rng.uniform(-0.3, 0.3), 6),
            "dest_lon": np.round(hub_lon + rng.uniform(-0.3, 0.3), 6),
        })

    # 3. Save to CSV
    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"✅ Generated {num_queries} route queries and saved to '{output_file}'")
    return df


if __name__ == "__main__":
    generate_mock_queries(num_queries=200, num_hubs=10)
