"""CLI argument parsing and main entry point."""

import argparse
import json
from collections.abc import Sequence
from pathlib import Path

import live_collage.config as lc_config
from live_collage.errors import CapacityViolation, ExportFailure
from live_collage.logging_utils import logger
from live_collage.session import CollageSession
from live_collage.type_defs import PACKER_NAMES, VIEWPORT_CLASSES
from live_collage.version import resolve_project_version


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the command-line interface."""
    p = argparse.ArgumentParser(
        prog="live-collage",
        description="Pack photos into a balanced collage and export a PNG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "live-collage --photos a.jpg b.jpg c.jpg\n"
            "live-collage --photos *.jpg --strategy fixed --output out\n"
            "live-collage --photos *.jpg --viewport-width 390 --print-plan"
        ),
    )
    p.add_argument(
        "--version", action="version",
        version=f"%(prog)s {resolve_project_version()}")

    inputs = p.add_argument_group("input")
    inputs.add_argument(
        "--photos", nargs="+", type=Path, default=[],
        help="Image files to add, in collage order")

    layout = p.add_argument_group("layout")
    layout.add_argument(
        "--strategy", choices=list(PACKER_NAMES),
        help="Packing strategy", default=argparse.SUPPRESS)
    layout.add_argument(
        "--viewport", choices=list(VIEWPORT_CLASSES),
        help="Viewport class used to size the mosaic grid",
        default=argparse.SUPPRESS)
    layout.add_argument(
        "--viewport-width", type=int, default=None,
        help="Viewport width in pixels; overrides --viewport")
    layout.add_argument(
        "--match-orientation", action="store_true",
        help="Turn wide and tall mosaic cells to follow photo orientation",
        default=argparse.SUPPRESS)

    render = p.add_argument_group("render")
    render.add_argument(
        "--cell-px", type=int, help="Logical cell size in pixels",
        default=argparse.SUPPRESS)
    render.add_argument(
        "--gap-px", type=int, help="Gap between cells in pixels",
        default=argparse.SUPPRESS)
    render.add_argument(
        "--padding-px", type=int, help="Outer padding in pixels",
        default=argparse.SUPPRESS)

    output = p.add_argument_group("output")
    output.add_argument(
        "--output", type=str, help="Output directory",
        default=argparse.SUPPRESS)
    output.add_argument(
        "--app-name", type=str, help="Prefix of the exported file name",
        default=argparse.SUPPRESS)
    output.add_argument(
        "--scale", type=int, help="Export scale factor",
        default=argparse.SUPPRESS)
    output.add_argument(
        "--print-plan", action="store_true",
        help="Print the placement plan as JSON instead of exporting")

    cfg = p.add_argument_group("config")
    cfg.add_argument(
        "--config", type=str,
        help="Path to config.toml file")
    cfg.add_argument(
        "--validate-config-only", action="store_true",
        help="Validate config file and exit without building a collage")

    return p


def log_parameters(
    session: CollageSession,
    args: argparse.Namespace,
) -> None:
    """Log the effective layout and export parameters."""
    cfg = session.config
    if getattr(args, "config", None):
        logger.info("Loaded config from: %s", args.config)
    logger.info("Photos requested: %d", len(args.photos))
    logger.info("Strategy: %s", cfg.layout.strategy)
    logger.info("Viewport: %s", session.current_viewport_class())
    logger.info("Match Orientation: %s",
                "Enabled" if cfg.layout.match_orientation else "Disabled")
    logger.info("Cell Size: %dpx (gap %dpx, padding %dpx)",
                cfg.render.cell_px, cfg.render.gap_px, cfg.render.padding_px)
    logger.info("Output Directory: %s", cfg.export.output)
    logger.info("Export Scale: %dx", cfg.export.scale)


def run_from_args(args: argparse.Namespace) -> int:
    """Build a collage from parsed arguments and return an exit code."""
    base_cfg: lc_config.CollageConfig | None = None
    if args.config:
        base_cfg = lc_config.ConfigLoader.load(args.config)
        if args.validate_config_only:
            logger.info("Config %s validated successfully.", args.config)
            return 0

    cfg = lc_config.build_config_from_cli(vars(args), base_config=base_cfg)
    session = CollageSession(cfg)
    if args.viewport_width is not None:
        session.set_viewport_width(args.viewport_width)
    log_parameters(session, args)

    try:
        report = session.ingest_batch(args.photos)
    except CapacityViolation as exc:
        logger.error("Too many photos for the %s strategy: %s",
                     cfg.layout.strategy, exc)
        return 1
    if report.failures:
        logger.warning("%d of %d photos could not be read",
                       len(report.failures), len(args.photos))
    if not len(session.photos):
        logger.error("No readable photos to arrange")
        return 1

    if args.print_plan:
        print(json.dumps(session.plan.to_dict(), indent=2))  # noqa: T201
        return 0

    try:
        session.export()
    except ExportFailure as exc:
        logger.error("Error generating collage: %s", exc)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command-line interface."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if not args.validate_config_only and not args.photos:
        arg_parser.error("the following arguments are required: --photos")
    if args.validate_config_only and not args.config:
        arg_parser.error("--validate-config-only requires --config")
    if args.viewport_width is not None and args.viewport_width < 0:
        arg_parser.error("--viewport-width must be non-negative")

    try:
        return run_from_args(args)
    except (FileNotFoundError, ValueError) as exc:
        arg_parser.error(str(exc))


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
