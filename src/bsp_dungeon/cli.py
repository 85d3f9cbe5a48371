"""BSP Dungeon - command line generator

Usage:
    bsp-dungeon --seed 42 --ascii
    bsp-dungeon --config dungeon.json --count 5 --output-dir out --format json --format dot
"""

import argparse
import logging
import sys
from typing import List, Optional

from .conversion.occupancy_grid import build_occupancy_grid, render_ascii
from .generators.bsp.settings import DungeonConfigError, DungeonSettings, load_settings
from .pipeline import OUTPUT_FORMATS, AutomatedPipeline, PipelineError, PipelineSettings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VALIDATION_FAILED = 1
EXIT_CONFIG_ERROR = 2

# (flag, settings field, type, help)
_SETTING_OPTIONS = (
    ("--width", "dungeon_width", int, "Dungeon width in grid units."),
    ("--length", "dungeon_length", int, "Dungeon length in grid units."),
    ("--max-iterations", "max_iterations", int, "Partition nodes to process (0 = one room)."),
    ("--room-width-min", "room_width_min", int, "Minimum partition width."),
    ("--room-length-min", "room_length_min", int, "Minimum partition length."),
    ("--bottom-modifier", "room_bottom_corner_modifier", float,
     "Room bottom-left corner modifier, 0.0 to 0.3."),
    ("--top-modifier", "room_top_corner_modifier", float,
     "Room top-right corner modifier, 0.7 to 1.0."),
    ("--room-offset", "room_offset", int, "Inset of rooms from their partition edges."),
    ("--corridor-width", "corridor_width", int, "Corridor thickness."),
    ("--wall-clearance", "wall_clearance", int, "Minimum distance from a corridor to a room corner."),
    ("--seed", "seed", int, "Random seed; omit for a fresh layout each run."),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bsp-dungeon",
        description="Generate rectangular dungeon layouts by binary space partitioning",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON settings file; command line options override its values.",
    )
    for flag, dest, kind, help_text in _SETTING_OPTIONS:
        parser.add_argument(flag, dest=dest, type=kind, default=None, help=help_text)

    parser.add_argument("--count", type=int, default=1, help="Number of layouts to generate.")
    parser.add_argument("--output-dir", type=str, default=None, help="Directory for output files.")
    parser.add_argument("--name", type=str, default="dungeon", help="Base name of output files.")
    parser.add_argument(
        "--format",
        dest="formats",
        action="append",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format, may be repeated (default: json).",
    )
    parser.add_argument("--ascii", action="store_true", help="Print an ASCII preview of each layout.")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Check layout invariants; exit with status 1 if any check fails.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    return parser


def _configure_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def settings_from_args(args: argparse.Namespace) -> DungeonSettings:
    """
    Build dungeon settings from the config file and command line overrides.

    Raises:
        DungeonConfigError: If the resulting settings are invalid
        OSError: If the config file cannot be read
    """
    settings = load_settings(args.config) if args.config else DungeonSettings()
    overrides = {}
    for _, dest, _, _ in _SETTING_OPTIONS:
        value = getattr(args, dest)
        if value is not None:
            overrides[dest] = value
    data = settings.to_dict()
    data.update(overrides)
    return DungeonSettings.from_dict(data).validate()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        dungeon_settings = settings_from_args(args)
        formats = args.formats or (['json'] if args.output_dir else [])
        pipeline = AutomatedPipeline(PipelineSettings(
            dungeon=dungeon_settings,
            count=args.count,
            output_dir=args.output_dir,
            name=args.name,
            formats=formats,
            validate=args.validate,
        ))
    except (DungeonConfigError, PipelineError, OSError) as e:
        logger.error(f"Configuration error: {e}")
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    result = pipeline.run()

    for layout in result.layouts:
        stats = layout.get_layout_stats()
        print(f"seed={layout.settings.seed} rooms={stats['room_count']} "
              f"corridors={stats['corridor_count']} missing={stats['missing_corridors']}")
        if args.ascii:
            print(render_ascii(build_occupancy_grid(layout)))

    for path in result.output_files:
        print(f"wrote {path}")

    for validation in result.validation:
        if validation.failed:
            print(validation.report(), file=sys.stderr)

    if not result.success:
        for error in result.errors:
            print(f"error: {error}", file=sys.stderr)
        return EXIT_VALIDATION_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
