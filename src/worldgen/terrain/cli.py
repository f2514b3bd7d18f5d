"""Command-line interface for world generation."""

import argparse
import logging
import sys
import time

import structlog


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for world generation."""
    parser = argparse.ArgumentParser(
        description="Generate a seasonal toroidal world"
    )
    parser.add_argument(
        "--size", type=int, default=128, help="Grid edge length, a power of two (default: 128)"
    )
    parser.add_argument(
        "--seasons", type=int, default=4, help="Seasons per year (default: 4)"
    )
    parser.add_argument(
        "--seed", type=int, default=42, help="Random seed (default: 42)"
    )
    parser.add_argument(
        "--inspect",
        type=int,
        nargs=2,
        action="append",
        metavar=("ROW", "COLUMN"),
        help="Print the cell at ROW COLUMN (repeatable)",
    )
    parser.add_argument(
        "--sprites",
        type=str,
        default=None,
        help="Sprite directory; report render tags with no image",
    )
    parser.add_argument(
        "--debug-images",
        type=str,
        default=None,
        help="Directory to save debug images (optional)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    # Import here to avoid slow startup for --help
    from pydantic import ValidationError

    from ..catalog import SpriteCatalog
    from ..exceptions import WorldGenError
    from ..inspector import describe_cell
    from ..world import World
    from .config import TerrainConfig
    from .generator import generate_terrain

    try:
        config = TerrainConfig(
            seed=args.seed,
            size=args.size,
            seasons=args.seasons,
            debug_output_dir=args.debug_images,
        )
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    print(f"Generating {config.size}x{config.size} world with seed {config.seed}")
    print()

    start_time = time.time()
    try:
        result = generate_terrain(config)
    except WorldGenError as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        return 1
    gen_time = time.time() - start_time

    world = World(result.grid, seed=config.seed)

    print()
    print(f"Generation complete in {gen_time:.1f}s")
    print(f"Rivers: {len(result.rivers)}, lakes: {len(result.lakes)}")
    for river in sorted(result.rivers, key=len, reverse=True)[:5]:
        print(f"  {river.name}: {len(river)} cells, {river.source} -> {river.mouth}")

    if args.sprites:
        catalog = SpriteCatalog(args.sprites)
        tags = {tag for tag in result.grid.render_tag.ravel() if tag is not None}
        missing = catalog.missing(tags)
        print(f"Sprites: {len(catalog)} indexed, {len(missing)} of {len(tags)} tags missing")
        for tag in sorted(missing):
            print(f"  {tag}")

    for row, column in args.inspect or []:
        print()
        try:
            print(describe_cell(world, row, column))
        except KeyError as e:
            print(f"Cannot inspect: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
