"""Stop projection into point features."""

import logging
from collections.abc import Iterable

from gtfs_layers.models.features import StopFeature
from gtfs_layers.models.gtfs import StopRecord

logger = logging.getLogger(__name__)


def stop_to_feature(stop: StopRecord) -> StopFeature:
    """Convert a parsed stop to a point feature."""
    return StopFeature(
        stop_id=stop.stop_id,
        stop_name=stop.stop_name,
        stop_code=stop.stop_code,
        stop_desc=stop.stop_desc,
        zone_id=stop.zone_id,
        stop_url=stop.stop_url,
        location_type=stop.location_type,
        parent_station=stop.parent_station,
        wheelchair_boarding=stop.wheelchair_boarding,
        coordinates=(stop.stop_lon, stop.stop_lat),
    )


def project_stops(stops: Iterable[StopRecord]) -> list[StopFeature]:
    """Project stops to point features, in input order.

    Incomplete stop rows never become StopRecords, so every record here
    yields a feature.
    """
    features = [stop_to_feature(stop) for stop in stops]
    logger.info(f"Projected {len(features):,} stops")
    return features
