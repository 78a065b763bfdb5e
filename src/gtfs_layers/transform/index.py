"""In-memory join indexes between trips, routes, shapes and stops."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from gtfs_layers.models.gtfs import StopTimeRecord, TripRecord

logger = logging.getLogger(__name__)


class OrderedSet:
    """Deduplicating container that iterates in first-insertion order."""

    def __init__(self, items: Iterable[str] = ()) -> None:
        self._items: dict[str, None] = dict.fromkeys(items)

    def add(self, item: str) -> None:
        self._items.setdefault(item, None)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"OrderedSet({list(self._items)!r})"


@dataclass(frozen=True)
class RelationalIndex:
    """The three joins the layer transform needs.

    Multi-valued entries are tuples in first-seen order.
    """

    trip_routes: dict[str, str] = field(default_factory=dict)  # trip_id -> route_id
    route_shapes: dict[str, tuple[str, ...]] = field(default_factory=dict)
    stop_routes: dict[str, tuple[str, ...]] = field(default_factory=dict)


def _freeze(groups: dict[str, OrderedSet]) -> dict[str, tuple[str, ...]]:
    return {key: tuple(values) for key, values in groups.items()}


def build_trip_routes(trips: Iterable[TripRecord]) -> dict[str, str]:
    """Map trip_id -> route_id. A repeated trip_id keeps its last route."""
    trip_routes: dict[str, str] = {}
    for trip in trips:
        if trip.trip_id is not None and trip.route_id is not None:
            trip_routes[trip.trip_id] = trip.route_id
    return trip_routes


def build_route_shapes(trips: Iterable[TripRecord]) -> dict[str, tuple[str, ...]]:
    """Map route_id -> distinct shape_ids used by its trips."""
    route_shapes: dict[str, OrderedSet] = {}
    for trip in trips:
        if trip.route_id is not None and trip.shape_id is not None:
            route_shapes.setdefault(trip.route_id, OrderedSet()).add(trip.shape_id)
    return _freeze(route_shapes)


def build_stop_routes(
    stop_times: Iterable[StopTimeRecord],
    trip_routes: dict[str, str],
) -> dict[str, tuple[str, ...]]:
    """Map stop_id -> distinct route_ids serving it.

    `trip_routes` must be complete before this runs. Stop times whose trip
    has no route are logged and skipped.
    """
    stop_routes: dict[str, OrderedSet] = {}
    unresolved_trips: OrderedSet = OrderedSet()
    unresolved_rows = 0

    for stop_time in stop_times:
        route_id = trip_routes.get(stop_time.trip_id)
        if route_id is None:
            unresolved_rows += 1
            if stop_time.trip_id not in unresolved_trips:
                unresolved_trips.add(stop_time.trip_id)
                logger.warning(
                    f"No route found for trip_id '{stop_time.trip_id}' "
                    f"(referenced by stop_time for stop_id '{stop_time.stop_id}')"
                )
            continue
        stop_routes.setdefault(stop_time.stop_id, OrderedSet()).add(route_id)

    if unresolved_rows:
        logger.warning(
            f"Skipped {unresolved_rows:,} stop_times referencing "
            f"{len(unresolved_trips):,} unknown trips"
        )
    return _freeze(stop_routes)


def build_index(
    trips: Iterable[TripRecord],
    stop_times: Iterable[StopTimeRecord],
) -> RelationalIndex:
    """Build trip->route, route->shapes and stop->routes indexes.

    trip->route is fully built before any stop time is read.
    """
    trips = list(trips)
    trip_routes = build_trip_routes(trips)
    route_shapes = build_route_shapes(trips)
    stop_routes = build_stop_routes(stop_times, trip_routes)

    logger.info(
        f"Indexed {len(trip_routes):,} trips, {len(route_shapes):,} routes with shapes, "
        f"{len(stop_routes):,} served stops"
    )
    return RelationalIndex(
        trip_routes=trip_routes,
        route_shapes=route_shapes,
        stop_routes=stop_routes,
    )
