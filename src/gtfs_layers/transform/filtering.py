"""Narrowing the route layer to the routes serving one stop."""

from collections.abc import Mapping, Sequence

from gtfs_layers.models.features import RouteFeature


def filter_routes_by_stop(
    features: Sequence[RouteFeature],
    stop_id: str | None,
    stop_routes: Mapping[str, Sequence[str]],
) -> list[RouteFeature]:
    """Return the route features serving a stop.

    No stop (None or "") means no filter: every feature is returned. A stop
    with no index entry is a filter that matches nothing.

    Args:
        features: Full route layer.
        stop_id: Selected stop, if any.
        stop_routes: stop_id -> route_ids.

    Returns:
        Matching features in their original order.
    """
    if not stop_id:
        return list(features)

    route_ids = set(stop_routes.get(stop_id, ()))
    return [feature for feature in features if feature.route_id in route_ids]
