import argparse
import logging
from collections import Counter
from typing import List, Optional

from hexmapgen import (
    InvalidGridSizeError,
    MapGenerationConfig,
    adjust_config,
    export_map_json,
    generate_map,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a hex terrain map from a seed."
    )
    parser.add_argument("--width", type=int, default=40, help="Cells per row (multiple of 5)")
    parser.add_argument("--height", type=int, default=30, help="Rows (multiple of 5)")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Fixed seed; a fresh one is chosen when omitted",
    )
    parser.add_argument("--regions", type=int, default=1, help="Number of land regions (1-4)")
    parser.add_argument("--land", type=int, default=50, help="Land percentage")
    parser.add_argument("--erosion", type=int, default=50, help="Erosion percentage")
    parser.add_argument("--rivers", type=int, default=10, help="River percentage")
    parser.add_argument("--output", default=None, help="Write the generated cells to this JSON file")
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Open a preview window of the generated map",
    )
    parser.add_argument(
        "--setup",
        action="store_true",
        help="Pick settings interactively before generating",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> MapGenerationConfig:
    config = adjust_config(
        MapGenerationConfig(),
        region_count=args.regions,
        land_percentage=args.land,
        erosion_percentage=args.erosion,
        river_percentage=args.rivers,
    )
    if args.seed is not None:
        config = adjust_config(config, seed=args.seed, use_fixed_seed=True)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = config_from_args(args)
    if args.setup:
        from ui.generator_setup import choose_config

        chosen = choose_config(args.width, args.height, config)
        if chosen is None:
            print("No settings chosen. Exiting.")
            return 1
        config = chosen

    try:
        generated = generate_map(args.width, args.height, config)
    except InvalidGridSizeError as e:
        parser.error(str(e))
    report = generated.report
    terrains = Counter(cell.terrain_type_index for cell in generated.grid)
    underwater = sum(1 for cell in generated.grid if cell.is_underwater)
    print(f"Seed {report.seed}: {args.width}x{args.height} map")
    print(f"  land cells: {report.land_cells} (budget {report.land_budget})")
    print(f"  underwater cells: {underwater}")
    print(f"  rivers: {report.rivers} (budget {report.river_budget}, left {report.river_shortfall})")
    print("  terrain: " + ", ".join(f"{t}={n}" for t, n in sorted(terrains.items())))

    if args.output:
        export_map_json(generated.grid, args.output, report)
        print(f"Wrote {args.output}")

    if args.preview:
        from ui.map_view import MapView

        MapView(generated.grid).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
