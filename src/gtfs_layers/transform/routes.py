"""Route feature assembly from route attributes and shape polylines."""

import logging
from collections.abc import Iterable, Mapping, Sequence

from gtfs_layers.models.features import RouteFeature
from gtfs_layers.models.gtfs import RouteRecord
from gtfs_layers.transform.simplifier import Point

logger = logging.getLogger(__name__)


def hash_color(raw: str | None) -> str | None:
    """Prefix a raw hex color with '#'. None stays None."""
    return f"#{raw}" if raw else None


def route_to_feature(route: RouteRecord, shape_id: str, coords: Sequence[Point]) -> RouteFeature:
    """Build the feature for one (route, shape) pair."""
    return RouteFeature(
        route_id=route.route_id,
        shape_id=shape_id,
        route_short_name=route.route_short_name,
        route_long_name=route.route_long_name,
        route_desc=route.route_desc,
        route_type=route.route_type,
        route_url=route.route_url,
        route_color=hash_color(route.route_color),
        route_text_color=hash_color(route.route_text_color),
        coordinates=tuple(coords),
    )


def assemble_route_features(
    routes: Iterable[RouteRecord],
    route_shapes: Mapping[str, Sequence[str]],
    polylines: Mapping[str, Sequence[Point]],
) -> list[RouteFeature]:
    """Emit one feature per (route, shape) pair with a drawable polyline.

    Routes without shapes, shapes without points and polylines shorter
    than two points are skipped.

    Args:
        routes: Parsed routes, in feed order.
        route_shapes: route_id -> shape_ids.
        polylines: shape_id -> simplified (lon, lat) points.

    Returns:
        Features in route order, then shape order.
    """
    features: list[RouteFeature] = []
    skipped = 0
    for route in routes:
        for shape_id in route_shapes.get(route.route_id, ()):
            coords = polylines.get(shape_id)
            if coords is None or len(coords) < 2:
                skipped += 1
                continue
            features.append(route_to_feature(route, shape_id, coords))

    if skipped:
        logger.debug(f"Skipped {skipped:,} route/shape pairs without a drawable polyline")
    logger.info(f"Assembled {len(features):,} route features")
    return features
