"""Pydantic models for the derived map layers."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from gtfs_layers.models.gtfs import RouteRecord

# (lon, lat), GeoJSON axis order
Coordinate = tuple[float, float]


class RouteFeature(BaseModel):
    """A route drawn along one of its shapes."""

    model_config = ConfigDict(frozen=True)

    route_id: str
    shape_id: str
    route_short_name: str | None = None
    route_long_name: str | None = None
    route_desc: str | None = None
    route_type: int | None = None
    route_url: str | None = None
    route_color: str | None = Field(default=None, description="'#RRGGBB' or None")
    route_text_color: str | None = Field(default=None, description="'#RRGGBB' or None")
    coordinates: tuple[Coordinate, ...] = Field(min_length=2)

    def to_geojson(self) -> dict[str, Any]:
        """Render as a GeoJSON LineString feature."""
        return {
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [list(coord) for coord in self.coordinates],
            },
            "properties": self.model_dump(exclude={"coordinates"}),
        }


class StopFeature(BaseModel):
    """A stop as a point geometry."""

    model_config = ConfigDict(frozen=True)

    stop_id: str
    stop_name: str
    stop_code: str | None = None
    stop_desc: str | None = None
    zone_id: str | None = None
    stop_url: str | None = None
    location_type: int | None = None
    parent_station: str | None = None
    wheelchair_boarding: int | None = None
    coordinates: Coordinate

    def to_geojson(self) -> dict[str, Any]:
        """Render as a GeoJSON Point feature."""
        return {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": list(self.coordinates)},
            "properties": self.model_dump(exclude={"coordinates"}),
        }


class LayerBundle(BaseModel):
    """Output of one transform pass over a feed.

    Replaced wholesale when a new feed is loaded; nothing accumulates
    across feeds.
    """

    model_config = ConfigDict(frozen=True)

    route_features: list[RouteFeature] = Field(default_factory=list)
    stop_features: list[StopFeature] = Field(default_factory=list)
    stop_routes: dict[str, tuple[str, ...]] = Field(
        default_factory=dict, description="stop_id -> serving route_ids, first-seen order"
    )
    routes_by_id: dict[str, RouteRecord] = Field(
        default_factory=dict, description="Route attributes for labelling route_ids"
    )

    def routes_geojson(self, features: list[RouteFeature] | None = None) -> dict[str, Any]:
        """Route layer as a GeoJSON FeatureCollection.

        Args:
            features: Optional subset (e.g. a filtered view). Defaults to all routes.
        """
        if features is None:
            features = self.route_features
        return {"type": "FeatureCollection", "features": [f.to_geojson() for f in features]}

    def stops_geojson(self) -> dict[str, Any]:
        """Stop layer as a GeoJSON FeatureCollection."""
        return {
            "type": "FeatureCollection",
            "features": [f.to_geojson() for f in self.stop_features],
        }
