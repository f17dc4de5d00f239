"""Command-line interface for heightfield generation."""

import argparse
import logging
import time

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Route structlog output to the console."""
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def render_preview(land_mask) -> str:
    """ASCII map of a land mask: '#' for land, '~' for water."""
    return "\n".join(
        "".join("#" if is_land else "~" for is_land in row) for row in land_mask
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a terrain heightfield and calibrate its water level"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path or name of a TOML config"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--method",
        type=str,
        choices=["value_noise", "diamond_square"],
        default=None,
        help="Synthesis method (overrides config)",
    )
    parser.add_argument(
        "--octaves", type=int, default=None, help="Value-noise octaves"
    )
    parser.add_argument(
        "--land-ratio", type=float, default=None, help="Target land fraction (0-1)"
    )
    parser.add_argument(
        "--size", type=int, default=None, help="Viewport side in pixels"
    )
    parser.add_argument(
        "--tile-size", type=int, default=None, help="Tile side in pixels"
    )
    parser.add_argument("--zoom", type=float, default=None, help="Zoom factor")
    parser.add_argument(
        "--preview", action="store_true", help="Print an ASCII land/water map"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for heightfield generation."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    logger = structlog.get_logger()

    # Import here to avoid slow startup for --help
    from .config import TerrainConfig, find_config, load_config
    from .exceptions import HeightfieldError
    from .session import TerrainSession
    from .types import Method

    if args.config:
        try:
            config = load_config(find_config(args.config))
        except FileNotFoundError as e:
            logger.error("config_not_found", error=str(e))
            return 1
    else:
        config = TerrainConfig()

    if args.seed is not None:
        config.seed = args.seed
    if args.method is not None:
        config.method = Method(args.method)
    if args.octaves is not None:
        config.value_noise.octaves = args.octaves
    if args.land_ratio is not None:
        config.calibration.land_ratio = args.land_ratio
    if args.size is not None:
        config.viewport.size = args.size
    if args.tile_size is not None:
        config.viewport.tile_size = args.tile_size
    if args.zoom is not None:
        config.viewport.zoom = args.zoom

    start_time = time.time()
    try:
        session = TerrainSession(config)
    except HeightfieldError as e:
        logger.error("invalid_configuration", error=str(e))
        return 2
    gen_time = time.time() - start_time

    print(f"Method: {session.method.value}")
    print(f"Seed: {session.seed}")
    print(f"Pan offset: ({session.viewport.pan_x}, {session.viewport.pan_y})")
    print(f"Threshold: {session.threshold:.6f}")
    print(
        f"Land ratio: {session.land_tile_ratio():.2%} "
        f"(target {session.land_ratio:.2%})"
    )
    print(f"Generated in {gen_time:.2f}s")

    if args.preview:
        print()
        print(render_preview(session.classify_tiles()))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
