"""Tests for stop projection, route feature assembly and GeoJSON export."""

import pytest
from pydantic import ValidationError

from gtfs_layers.models.features import LayerBundle, RouteFeature
from gtfs_layers.models.gtfs import RouteRecord, StopRecord
from gtfs_layers.transform.routes import assemble_route_features, hash_color
from gtfs_layers.transform.stops import project_stops


@pytest.fixture
def routes() -> list[RouteRecord]:
    return [
        RouteRecord(route_id="A", route_short_name="1", route_color="FF0000", route_type=3),
        RouteRecord(route_id="B", route_long_name="Crosstown"),
        RouteRecord(route_id="C"),
    ]


class TestAssembleRouteFeatures:
    """Tests for route feature assembly."""

    def test_one_feature_per_route_shape_pair(self, routes: list[RouteRecord]) -> None:
        """Each drawable (route, shape) pair becomes a feature."""
        features = assemble_route_features(
            routes,
            {"A": ("s1", "s2"), "B": ("s3",)},
            {"s1": [(0, 0), (1, 1)], "s2": [(1, 1), (2, 2), (3, 3)], "s3": [(5, 5), (6, 6)]},
        )
        assert [(f.route_id, f.shape_id) for f in features] == [("A", "s1"), ("A", "s2"), ("B", "s3")]

    def test_skips_short_and_missing_polylines(self, routes: list[RouteRecord]) -> None:
        """Pairs without at least two points are absent."""
        features = assemble_route_features(
            routes,
            {"A": ("s1", "missing"), "B": ("short",)},
            {"s1": [(0, 0), (1, 1)], "short": [(5, 5)]},
        )
        assert [(f.route_id, f.shape_id) for f in features] == [("A", "s1")]

    def test_route_without_shapes(self, routes: list[RouteRecord]) -> None:
        assert assemble_route_features(routes, {}, {"s1": [(0, 0), (1, 1)]}) == []

    def test_colors_hashed_or_none(self, routes: list[RouteRecord]) -> None:
        """Colors get a '#' prefix; absent colors stay None."""
        features = assemble_route_features(
            routes,
            {"A": ("s1",), "B": ("s1",)},
            {"s1": [(0, 0), (1, 1)]},
        )
        assert features[0].route_color == "#FF0000"
        assert features[1].route_color is None
        assert features[1].route_text_color is None

    def test_attributes_copied(self, routes: list[RouteRecord]) -> None:
        features = assemble_route_features(routes, {"A": ("s1",)}, {"s1": [(0, 0), (1, 1)]})
        assert features[0].route_short_name == "1"
        assert features[0].route_type == 3
        assert features[0].coordinates == ((0.0, 0.0), (1.0, 1.0))

    def test_hash_color(self) -> None:
        assert hash_color("00FF00") == "#00FF00"
        assert hash_color(None) is None
        assert hash_color("") is None


class TestRouteFeatureModel:
    """Tests for the RouteFeature invariants."""

    def test_rejects_single_point_line(self) -> None:
        with pytest.raises(ValidationError):
            RouteFeature(route_id="A", shape_id="s1", coordinates=((0.0, 0.0),))

    def test_is_frozen(self) -> None:
        feature = RouteFeature(route_id="A", shape_id="s1", coordinates=((0, 0), (1, 1)))
        with pytest.raises(ValidationError):
            feature.route_id = "B"


class TestProjectStops:
    """Tests for stop projection."""

    def test_projects_points(self) -> None:
        stops = [
            StopRecord(stop_id="S1", stop_name="Main", stop_lon=-73.5, stop_lat=45.5, zone_id="1"),
            StopRecord(stop_id="S2", stop_name="Side", stop_lon=1.0, stop_lat=2.0),
        ]
        features = project_stops(stops)
        assert [f.stop_id for f in features] == ["S1", "S2"]
        assert features[0].coordinates == (-73.5, 45.5)
        assert features[0].zone_id == "1"


class TestGeoJSON:
    """Tests for GeoJSON export."""

    def test_routes_geojson(self) -> None:
        feature = RouteFeature(
            route_id="A", shape_id="s1", route_color="#FF0000", coordinates=((0, 0), (1, 1))
        )
        collection = LayerBundle(route_features=[feature]).routes_geojson()
        assert collection["type"] == "FeatureCollection"
        geojson = collection["features"][0]
        assert geojson["geometry"] == {"type": "LineString", "coordinates": [[0.0, 0.0], [1.0, 1.0]]}
        assert geojson["properties"]["route_color"] == "#FF0000"
        assert "coordinates" not in geojson["properties"]

    def test_routes_geojson_subset(self) -> None:
        feature = RouteFeature(route_id="A", shape_id="s1", coordinates=((0, 0), (1, 1)))
        bundle = LayerBundle(route_features=[feature])
        assert bundle.routes_geojson([])["features"] == []

    def test_stops_geojson(self) -> None:
        stops = project_stops(
            [StopRecord(stop_id="S1", stop_name="Main", stop_lon=-73.5, stop_lat=45.5)]
        )
        geojson = LayerBundle(stop_features=stops).stops_geojson()["features"][0]
        assert geojson["geometry"] == {"type": "Point", "coordinates": [-73.5, 45.5]}
        assert geojson["properties"]["stop_name"] == "Main"
