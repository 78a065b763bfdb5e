"""Typed parsing of raw feed rows into records.

Every field goes through one explicit parser, and every entity has one
predicate deciding whether a row is usable. A value that is missing, blank
or not parseable as the field's type is treated as absent.
"""

import logging
import math
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from gtfs_layers.models.gtfs import (
    RouteRecord,
    ShapePoint,
    StopRecord,
    StopTimeRecord,
    TripRecord,
)

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]
R = TypeVar("R")


def clean_text(value: Any) -> str | None:
    """Return a stripped string, or None for missing/blank values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer():
            value = int(value)
    text = str(value).strip()
    return text or None


def parse_float(value: Any) -> float | None:
    """Parse a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_int(value: Any) -> int | None:
    """Parse an integer, accepting integral floats such as "3.0"."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    number = parse_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def parse_hex_color(value: Any) -> str | None:
    """Parse a raw hex color, dropping a leading '#' if the feed carries one."""
    text = clean_text(value)
    if text is None:
        return None
    return text.lstrip("#") or None


def parse_route(row: Row) -> RouteRecord | None:
    """Parse a routes.txt row. Requires route_id."""
    route_id = clean_text(row.get("route_id"))
    if route_id is None:
        return None
    return RouteRecord(
        route_id=route_id,
        route_short_name=clean_text(row.get("route_short_name")),
        route_long_name=clean_text(row.get("route_long_name")),
        route_desc=clean_text(row.get("route_desc")),
        route_type=parse_int(row.get("route_type")),
        route_url=clean_text(row.get("route_url")),
        route_color=parse_hex_color(row.get("route_color")),
        route_text_color=parse_hex_color(row.get("route_text_color")),
    )


def parse_trip(row: Row) -> TripRecord | None:
    """Parse a trips.txt row.

    Each join uses a different pair of keys, so a trip is kept as long as
    any key is present; the index builder checks the pair it needs.
    """
    trip = TripRecord(
        trip_id=clean_text(row.get("trip_id")),
        route_id=clean_text(row.get("route_id")),
        shape_id=clean_text(row.get("shape_id")),
    )
    if trip.trip_id is None and trip.route_id is None and trip.shape_id is None:
        return None
    return trip


def parse_shape_point(row: Row) -> ShapePoint | None:
    """Parse a shapes.txt row. Requires id, both coordinates and sequence."""
    shape_id = clean_text(row.get("shape_id"))
    lon = parse_float(row.get("shape_pt_lon"))
    lat = parse_float(row.get("shape_pt_lat"))
    sequence = parse_int(row.get("shape_pt_sequence"))
    if shape_id is None or lon is None or lat is None or sequence is None:
        return None
    return ShapePoint(
        shape_id=shape_id, shape_pt_lon=lon, shape_pt_lat=lat, shape_pt_sequence=sequence
    )


def parse_stop(row: Row) -> StopRecord | None:
    """Parse a stops.txt row. Requires id, name and both coordinates."""
    stop_id = clean_text(row.get("stop_id"))
    stop_name = clean_text(row.get("stop_name"))
    lon = parse_float(row.get("stop_lon"))
    lat = parse_float(row.get("stop_lat"))
    if stop_id is None or stop_name is None or lon is None or lat is None:
        return None
    return StopRecord(
        stop_id=stop_id,
        stop_name=stop_name,
        stop_lon=lon,
        stop_lat=lat,
        stop_code=clean_text(row.get("stop_code")),
        stop_desc=clean_text(row.get("stop_desc")),
        zone_id=clean_text(row.get("zone_id")),
        stop_url=clean_text(row.get("stop_url")),
        location_type=parse_int(row.get("location_type")),
        parent_station=clean_text(row.get("parent_station")),
        wheelchair_boarding=parse_int(row.get("wheelchair_boarding")),
    )


def parse_stop_time(row: Row) -> StopTimeRecord | None:
    """Parse a stop_times.txt row. Requires trip_id and stop_id."""
    trip_id = clean_text(row.get("trip_id"))
    stop_id = clean_text(row.get("stop_id"))
    if trip_id is None or stop_id is None:
        return None
    return StopTimeRecord(trip_id=trip_id, stop_id=stop_id)


def parse_table(
    rows: Iterable[Row] | None,
    parser: Callable[[Row], R | None],
    name: str,
) -> list[R]:
    """Parse every row of a table, dropping rows the parser rejects.

    Args:
        rows: Raw rows, or None when the table is absent from the feed.
        parser: One of the parse_* functions above.
        name: Table name, for logging.

    Returns:
        Parsed records in input order.
    """
    records: list[R] = []
    skipped = 0
    for row in rows or ():
        record = parser(row)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    if skipped:
        logger.debug(f"{name}: skipped {skipped:,} incomplete rows")
    return records
