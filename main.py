#!/usr/bin/env python3
"""
Starfield Viewer

An interactive 3D view of a small star catalog using Vispy. Stars are
placed from their right ascension, declination and distance, sized by
magnitude and colored from the catalog.

Usage:
    python main.py                              # Bundled catalog
    python main.py --catalog my_stars.json      # Local catalog file
    python main.py --catalog https://host/stars.json --timeout 10
"""

import argparse
import asyncio
import logging
import sys

from starfield.catalog.loader import CatalogError
from starfield.config import (
    DEFAULT_CATALOG,
    FOG_DENSITY,
    HELP_CONTENT,
    INFO_PANEL_OPACITY,
    STAR_SIZE_SCALE,
)
from starfield.state.settings import Settings
from starfield.visualization.controller import StarfieldController

# Note: visualization.viewer is imported lazily in main() to avoid
# loading graphics libraries when only --help is requested


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Starfield Viewer - interactive 3D star catalog',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_CONTENT,
    )
    parser.add_argument(
        '--catalog',
        '-c',
        type=str,
        default=DEFAULT_CATALOG,
        metavar='SOURCE',
        help=f'Bundled catalog name, file path or http(s) URL (default: {DEFAULT_CATALOG})',
    )
    parser.add_argument(
        '--no-background',
        action='store_true',
        help='Start with the background star field hidden',
    )
    parser.add_argument(
        '--fog',
        '-f',
        type=float,
        default=FOG_DENSITY,
        metavar='DENSITY',
        help=f'Fog density, 0.0-0.002 (default: {FOG_DENSITY})',
    )
    parser.add_argument(
        '--star-scale',
        '-s',
        type=float,
        default=STAR_SIZE_SCALE,
        metavar='SCALE',
        help=f'Star size scale, 0.5-2.0 (default: {STAR_SIZE_SCALE})',
    )
    parser.add_argument(
        '--panel-opacity',
        type=float,
        default=INFO_PANEL_OPACITY,
        metavar='OPACITY',
        help=f'Info panel opacity, 0.3-1.0 (default: {INFO_PANEL_OPACITY})',
    )
    parser.add_argument(
        '--locked-camera',
        action='store_true',
        help='Start with mouse camera control disabled (toggle with C)',
    )
    parser.add_argument(
        '--timeout',
        '-t',
        type=float,
        default=None,
        metavar='SECONDS',
        help='Give up on a remote catalog server after this many seconds',
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Enable debug logging',
    )
    return parser.parse_args()


async def load_stars(controller: StarfieldController, source: str, timeout=None):
    """Load the catalog into the controller; timeout bounds remote waits."""
    return await controller.load(source, timeout=timeout)


def main():
    """Main entry point."""
    print("Use --help for command-line options.")
    print("Press H in the visualization window to toggle on-screen help.")
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        settings = Settings(
            show_background_stars=not args.no_background,
            fog_density=args.fog,
            camera_allows_control=not args.locked_camera,
            star_size_scale=args.star_scale,
            info_panel_opacity=args.panel_opacity,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)

    controller = StarfieldController(settings)

    print(f"Loading stars from: {args.catalog}")
    try:
        records = asyncio.run(load_stars(controller, args.catalog, args.timeout))
    except CatalogError as e:
        print(f"Error: {e}")
        sys.exit(1)
    print(f"Loaded {len(records)} stars.")

    # Import here to avoid loading graphics libraries for --help
    from starfield.visualization.viewer import run_visualization

    print("Starting visualization...")
    try:
        run_visualization(controller)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        print("Shutting down...")
        controller.close()
        print("Done.")


if __name__ == '__main__':
    main()
