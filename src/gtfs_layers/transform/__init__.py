"""Feed-to-layer transform stages."""

from gtfs_layers.transform.filtering import filter_routes_by_stop
from gtfs_layers.transform.index import OrderedSet, RelationalIndex, build_index
from gtfs_layers.transform.pipeline import build_layers
from gtfs_layers.transform.routes import assemble_route_features
from gtfs_layers.transform.shapes import assemble_shapes, group_shape_points
from gtfs_layers.transform.simplifier import simplify
from gtfs_layers.transform.stops import project_stops
from gtfs_layers.transform.styling import (
    DEFAULT_ROUTE_COLOR,
    contrasting_text_color,
    route_color_or_default,
    route_label,
)

__all__ = [
    # Pipeline
    "build_layers",
    # Stages
    "simplify",
    "group_shape_points",
    "assemble_shapes",
    "build_index",
    "project_stops",
    "assemble_route_features",
    "filter_routes_by_stop",
    # Index
    "OrderedSet",
    "RelationalIndex",
    # Styling
    "DEFAULT_ROUTE_COLOR",
    "route_color_or_default",
    "contrasting_text_color",
    "route_label",
]
