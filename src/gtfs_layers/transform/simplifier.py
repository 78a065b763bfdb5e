"""Polyline simplification within a distance tolerance.

Two modes are available:

- high quality: Douglas-Peucker on the full path. No removed point deviates
  from the simplified path by more than the tolerance.
- fast: a radial-distance pass first drops points closer than the tolerance
  to the previously kept point, then Douglas-Peucker runs on what is left.
  Much cheaper on dense shapes, but the deviation bound no longer holds.

Points are only ever removed; the first and last input points are always
kept.
"""

from collections.abc import Callable, Sequence

from shapely.geometry import LineString

Point = tuple[float, float]
SimplifyFn = Callable[[Sequence[Point], float, bool], list[Point]]

DEFAULT_TOLERANCE = 0.001


def _sq_distance(a: Point, b: Point) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy


def radial_distance_pass(points: Sequence[Point], tolerance: float) -> list[Point]:
    """Drop points within `tolerance` of the last kept point.

    Args:
        points: Ordered (x, y) points.
        tolerance: Minimum distance between consecutive kept points.

    Returns:
        Reduced point list, always ending with the last input point.
    """
    if len(points) < 3:
        return list(points)

    sq_tolerance = tolerance * tolerance
    last_kept = 0
    kept = [points[0]]
    for i in range(1, len(points)):
        if _sq_distance(points[i], points[last_kept]) > sq_tolerance:
            kept.append(points[i])
            last_kept = i
    if last_kept != len(points) - 1:
        kept.append(points[-1])
    return kept


def douglas_peucker(points: Sequence[Point], tolerance: float) -> list[Point]:
    """Douglas-Peucker simplification backed by shapely/GEOS."""
    if len(points) < 3:
        return list(points)

    line = LineString(points)
    simplified = line.simplify(tolerance, preserve_topology=False)
    coords: list[Point] = [(x, y) for x, y in simplified.coords]

    # Degenerate input (e.g. all points identical) may collapse to an empty line
    if len(coords) < 2:
        return [points[0], points[-1]]

    # Keep original endpoints exactly
    coords[0] = points[0]
    coords[-1] = points[-1]
    return coords


def simplify(
    points: Sequence[Point],
    tolerance: float = DEFAULT_TOLERANCE,
    high_quality: bool = True,
) -> list[Point]:
    """Simplify an ordered polyline.

    Args:
        points: Ordered (lon, lat) points.
        tolerance: Maximum deviation in input coordinate units.
        high_quality: Skip the radial-distance pre-pass.

    Returns:
        An ordered subsequence of `points` with at least two points when
        the input has at least two.

    Raises:
        ValueError: If tolerance is negative.
    """
    if tolerance < 0:
        raise ValueError(f"Simplification tolerance must be >= 0, got {tolerance}")

    pts: list[Point] = [(float(x), float(y)) for x, y in points]
    if len(pts) < 3:
        return pts

    if not high_quality:
        pts = radial_distance_pass(pts, tolerance)

    return douglas_peucker(pts, tolerance)
