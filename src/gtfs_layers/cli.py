import argparse
import json
import logging
import sys
from pathlib import Path

from gtfs_layers.data.config import LayerConfig, get_layer_config
from gtfs_layers.data.feed_loader import load_feed
from gtfs_layers.models.features import LayerBundle
from gtfs_layers.transform.filtering import filter_routes_by_stop
from gtfs_layers.transform.pipeline import build_layers
from gtfs_layers.transform.styling import route_label

logger = logging.getLogger(__name__)


def _log_progress(stage: str, step: int, total: int) -> None:
    logger.info(f"[{step}/{total}] {stage}")


def run_build(args: argparse.Namespace) -> LayerBundle:
    """Load a feed and run the transform with CLI overrides applied."""
    overrides: dict[str, object] = {}
    if args.tolerance is not None:
        overrides["simplify_tolerance"] = args.tolerance
    if args.fast:
        overrides["simplify_high_quality"] = False
    config: LayerConfig = get_layer_config().model_copy(update=overrides)

    feed = load_feed(args.gtfs_path)
    return build_layers(feed, config=config, progress=_log_progress)


def cmd_build(args: argparse.Namespace) -> None:
    bundle = run_build(args)
    routes = filter_routes_by_stop(bundle.route_features, args.stop, bundle.stop_routes)

    if args.layer == "routes":
        output = bundle.routes_geojson(routes)
    elif args.layer == "stops":
        output = bundle.stops_geojson()
    else:
        output = {
            "routes": bundle.routes_geojson(routes),
            "stops": bundle.stops_geojson(),
            "stop_routes": {k: list(v) for k, v in bundle.stop_routes.items()},
        }
    json.dump(output, sys.stdout, indent=args.indent)
    sys.stdout.write("\n")


def cmd_routes_at_stop(args: argparse.Namespace) -> None:
    bundle = run_build(args)
    route_ids = bundle.stop_routes.get(args.stop_id, ())
    if not route_ids:
        print(f"No routes serve stop {args.stop_id}")
        return
    print(f"Routes serving stop {args.stop_id}:")
    for route_id in route_ids:
        print(f"  {route_id}: {route_label(route_id, bundle.routes_by_id)}")


def _add_transform_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "gtfs_path",
        type=Path,
        help="Path to GTFS directory or ZIP file",
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=None,
        help="Simplification tolerance in degrees (default: GTFS_SIMPLIFY_TOLERANCE or 0.001)",
    )
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Use the fast (radial-distance) simplification mode",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gtfs-layers",
        description="Derive route and stop map layers from a GTFS feed",
    )
    subparsers = parser.add_subparsers(dest="command")

    # build command
    build_parser = subparsers.add_parser(
        "build",
        help="Write route/stop layers as GeoJSON to stdout",
    )
    _add_transform_arguments(build_parser)
    build_parser.add_argument(
        "--layer",
        choices=["routes", "stops", "all"],
        default="all",
        help="Which layer to write (default: all)",
    )
    build_parser.add_argument(
        "--stop",
        default=None,
        help="Only include routes serving this stop_id",
    )
    build_parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Indent the JSON output",
    )
    build_parser.set_defaults(handler=cmd_build)

    # routes-at-stop command
    stop_parser = subparsers.add_parser(
        "routes-at-stop",
        help="List the routes serving a stop",
    )
    _add_transform_arguments(stop_parser)
    stop_parser.add_argument("stop_id", help="Stop ID to look up")
    stop_parser.set_defaults(handler=cmd_routes_at_stop)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    # Configure logging (stderr, stdout carries the output)
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        args.handler(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
