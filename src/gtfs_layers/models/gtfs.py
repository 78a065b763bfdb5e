"""Pydantic models for the GTFS rows the layer transform consumes."""

from pydantic import BaseModel, ConfigDict


class RouteRecord(BaseModel):
    """GTFS route entity."""

    model_config = ConfigDict(frozen=True)

    route_id: str
    route_short_name: str | None = None
    route_long_name: str | None = None
    route_desc: str | None = None
    route_type: int | None = None  # 0=tram, 1=metro, 2=rail, 3=bus
    route_url: str | None = None
    route_color: str | None = None  # raw hex, no '#'
    route_text_color: str | None = None


class TripRecord(BaseModel):
    """GTFS trip entity, reduced to its join keys."""

    model_config = ConfigDict(frozen=True)

    trip_id: str | None = None
    route_id: str | None = None
    shape_id: str | None = None


class ShapePoint(BaseModel):
    """GTFS shapes entity (one vertex of a shape)."""

    model_config = ConfigDict(frozen=True)

    shape_id: str
    shape_pt_lon: float
    shape_pt_lat: float
    shape_pt_sequence: int


class StopRecord(BaseModel):
    """GTFS stop entity."""

    model_config = ConfigDict(frozen=True)

    stop_id: str
    stop_name: str
    stop_lon: float
    stop_lat: float
    stop_code: str | None = None
    stop_desc: str | None = None
    zone_id: str | None = None
    stop_url: str | None = None
    location_type: int | None = None  # 0=stop, 1=station, 2=entrance
    parent_station: str | None = None
    wheelchair_boarding: int | None = None


class StopTimeRecord(BaseModel):
    """GTFS stop_times entity, reduced to the trip/stop relation."""

    model_config = ConfigDict(frozen=True)

    trip_id: str
    stop_id: str
