"""One transform pass from raw feed tables to map layers."""

import logging
from collections.abc import Callable

from gtfs_layers.data.config import LayerConfig, get_layer_config
from gtfs_layers.data.feed_loader import FeedTables
from gtfs_layers.data.parsing import (
    parse_route,
    parse_shape_point,
    parse_stop,
    parse_stop_time,
    parse_table,
    parse_trip,
)
from gtfs_layers.models.features import LayerBundle
from gtfs_layers.transform.index import build_index
from gtfs_layers.transform.routes import assemble_route_features
from gtfs_layers.transform.shapes import assemble_shapes
from gtfs_layers.transform.simplifier import SimplifyFn, simplify
from gtfs_layers.transform.stops import project_stops

logger = logging.getLogger(__name__)

# progress(stage, step, total), called as each stage starts
ProgressCallback = Callable[[str, int, int], None]

STAGES = ("parse", "shapes", "index", "stops", "routes")


def build_layers(
    feed: FeedTables,
    config: LayerConfig | None = None,
    progress: ProgressCallback | None = None,
    simplifier: SimplifyFn | None = simplify,
) -> LayerBundle:
    """Derive route features, stop features and the stop->routes index.

    Row-level defects never raise: incomplete rows are dropped and
    unresolvable stop_times are logged and skipped.

    Args:
        feed: Raw feed tables, fully loaded.
        config: Simplification settings. Uses the environment config if not provided.
        progress: Optional callback reporting stage progress.
        simplifier: Simplification function; None leaves shapes unsimplified.

    Returns:
        A fresh LayerBundle.
    """
    if config is None:
        config = get_layer_config()

    def report(stage: str) -> None:
        if progress is not None:
            progress(stage, STAGES.index(stage) + 1, len(STAGES))

    report("parse")
    routes = parse_table(feed.routes, parse_route, "routes")
    trips = parse_table(feed.trips, parse_trip, "trips")
    shape_points = parse_table(feed.shapes, parse_shape_point, "shapes")
    stops = parse_table(feed.stops, parse_stop, "stops")
    stop_times = parse_table(feed.stop_times, parse_stop_time, "stop_times")

    report("shapes")
    polylines = assemble_shapes(
        shape_points,
        tolerance=config.simplify_tolerance,
        high_quality=config.simplify_high_quality,
        simplifier=simplifier,
    )

    report("index")
    index = build_index(trips, stop_times)

    report("stops")
    stop_features = project_stops(stops)

    report("routes")
    route_features = assemble_route_features(routes, index.route_shapes, polylines)

    logger.info(
        f"Layers built: {len(route_features):,} route features, "
        f"{len(stop_features):,} stop features, {len(index.stop_routes):,} indexed stops"
    )
    return LayerBundle(
        route_features=route_features,
        stop_features=stop_features,
        stop_routes=index.stop_routes,
        routes_by_id={route.route_id: route for route in routes},
    )
