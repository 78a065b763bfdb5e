"""Shape assembly: group shape points into simplified polylines."""

import logging
from collections.abc import Iterable

from gtfs_layers.models.gtfs import ShapePoint
from gtfs_layers.transform.simplifier import DEFAULT_TOLERANCE, Point, SimplifyFn, simplify

logger = logging.getLogger(__name__)


def group_shape_points(points: Iterable[ShapePoint]) -> dict[str, list[Point]]:
    """Group points by shape_id, ordered by shape_pt_sequence.

    The sort is stable, so points sharing a sequence value keep their
    input order. Duplicates are not removed.
    """
    groups: dict[str, list[ShapePoint]] = {}
    for point in points:
        groups.setdefault(point.shape_id, []).append(point)

    return {
        shape_id: [
            (p.shape_pt_lon, p.shape_pt_lat)
            for p in sorted(group, key=lambda p: p.shape_pt_sequence)
        ]
        for shape_id, group in groups.items()
    }


def assemble_shapes(
    points: Iterable[ShapePoint],
    tolerance: float = DEFAULT_TOLERANCE,
    high_quality: bool = True,
    simplifier: SimplifyFn | None = simplify,
) -> dict[str, list[Point]]:
    """Build one simplified polyline per shape_id.

    Args:
        points: Parsed shape points, in feed order.
        tolerance: Simplification tolerance in coordinate units.
        high_quality: Use the accurate simplification mode.
        simplifier: Simplification function. None means no simplifier is
            available; polylines are then returned unsimplified.

    Returns:
        Mapping of shape_id to ordered (lon, lat) points.
    """
    grouped = group_shape_points(points)

    if simplifier is None:
        logger.warning(
            f"No simplifier available, {len(grouped):,} shapes left unsimplified"
        )
        return grouped

    polylines: dict[str, list[Point]] = {}
    raw_count = 0
    simplified_count = 0
    for shape_id, coords in grouped.items():
        polylines[shape_id] = simplifier(coords, tolerance, high_quality)
        raw_count += len(coords)
        simplified_count += len(polylines[shape_id])

    logger.info(
        f"Assembled {len(polylines):,} shapes: {raw_count:,} points "
        f"simplified to {simplified_count:,} (tolerance={tolerance})"
    )
    return polylines
