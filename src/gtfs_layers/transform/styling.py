"""Presentation-time defaults for route layers.

The transform stores colors as the feed gives them (or None); consumers
apply these defaults when drawing.
"""

from collections.abc import Mapping

from gtfs_layers.models.features import RouteFeature
from gtfs_layers.models.gtfs import RouteRecord

DEFAULT_ROUTE_COLOR = "#808080"
DARK_TEXT = "#000000"
LIGHT_TEXT = "#FFFFFF"


def route_color_or_default(feature: RouteFeature) -> str:
    """Color to draw a route with."""
    return feature.route_color or DEFAULT_ROUTE_COLOR


def contrasting_text_color(hex_color: str | None) -> str:
    """Pick black or white text for a '#RGB' or '#RRGGBB' background.

    Uses YIQ luminance; unparseable colors get black text.
    """
    if not hex_color or not hex_color.startswith("#"):
        return DARK_TEXT

    digits = hex_color[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) != 6:
        return DARK_TEXT

    try:
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return DARK_TEXT

    yiq = (r * 299 + g * 587 + b * 114) / 1000
    return DARK_TEXT if yiq >= 128 else LIGHT_TEXT


def route_label(route_id: str, routes_by_id: Mapping[str, RouteRecord]) -> str:
    """Short name, else long name, else the raw route_id."""
    route = routes_by_id.get(route_id)
    if route is None:
        return route_id
    return route.route_short_name or route.route_long_name or route_id
