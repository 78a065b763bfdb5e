"""Tests for filtering routes by stop."""

import pytest

from gtfs_layers.models.features import RouteFeature
from gtfs_layers.transform.filtering import filter_routes_by_stop


@pytest.fixture
def features() -> list[RouteFeature]:
    line = ((0.0, 0.0), (1.0, 1.0))
    return [
        RouteFeature(route_id="A", shape_id="s1", coordinates=line),
        RouteFeature(route_id="A", shape_id="s2", coordinates=line),
        RouteFeature(route_id="B", shape_id="s3", coordinates=line),
    ]


STOP_ROUTES = {"S1": ("A",), "S2": ("A", "B"), "S3": ()}


class TestFilterRoutesByStop:
    """Tests for the filter contract."""

    def test_filters_to_serving_routes(self, features: list[RouteFeature]) -> None:
        """All shapes of each serving route are kept."""
        result = filter_routes_by_stop(features, "S1", STOP_ROUTES)
        assert [f.shape_id for f in result] == ["s1", "s2"]

    def test_multiple_routes(self, features: list[RouteFeature]) -> None:
        result = filter_routes_by_stop(features, "S2", STOP_ROUTES)
        assert result == features

    @pytest.mark.parametrize("stop_id", [None, ""])
    def test_no_stop_means_no_filter(self, features: list[RouteFeature], stop_id: str | None) -> None:
        """No selection returns the full collection."""
        assert filter_routes_by_stop(features, stop_id, STOP_ROUTES) == features

    def test_unknown_stop_matches_nothing(self, features: list[RouteFeature]) -> None:
        """An unknown stop yields an empty collection, not the full set."""
        assert filter_routes_by_stop(features, "NOPE", STOP_ROUTES) == []

    def test_stop_with_empty_entry(self, features: list[RouteFeature]) -> None:
        assert filter_routes_by_stop(features, "S3", STOP_ROUTES) == []

    def test_returns_new_list(self, features: list[RouteFeature]) -> None:
        result = filter_routes_by_stop(features, None, STOP_ROUTES)
        assert result is not features
