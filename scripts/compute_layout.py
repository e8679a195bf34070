#!/usr/bin/env python3
"""Compute the viewer layout for a document and print the scene as JSON.

Usage:
    python scripts/compute_layout.py [location]
    python scripts/compute_layout.py --collapse-all data/latest.json
    python scripts/compute_layout.py --width 600 --height 900 https://example.com/graph.json

If no location is given, uses the configured data location (data/latest.json).
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from linkmap.config import settings
from linkmap.presentation import visible_bounds
from linkmap.viewer import GraphViewer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


async def compute_layout(args: argparse.Namespace) -> bool:
    """Load the document, apply the requested view state, print the scene."""
    errors: list[str] = []
    viewer = GraphViewer(width=args.width, height=args.height, on_error=errors.append)

    try:
        if not await viewer.load(args.location):
            print(errors[-1] if errors else "Could not load data.", file=sys.stderr)
            return False

        if args.collapse_all:
            viewer.collapse_all()
        elif args.expand_all:
            viewer.expand_all()
        if args.zoom != 1.0:
            viewer.zoom_by(args.zoom)

        scene = viewer.scene
        print(json.dumps(scene.to_dict(), indent=2 if args.pretty else None, ensure_ascii=False))

        min_x, min_y, max_x, max_y = visible_bounds(viewer.store.visible_nodes(), pad=0.0)
        logger.info(
            f"{len(scene.nodes)} visible nodes, {len(scene.backlinks)} backlinks, "
            f"bounding box x=[{min_x:.1f}, {max_x:.1f}] y=[{min_y:.1f}, {max_y:.1f}]"
        )
        return True
    finally:
        await viewer.loader.close()


async def main() -> bool:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Compute viewer layout for a tree + backlink document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/compute_layout.py                          # Default data location
    python scripts/compute_layout.py graph.json --pretty      # Indented output
    python scripts/compute_layout.py graph.json --collapse-all
        """,
    )
    parser.add_argument(
        "location",
        nargs="?",
        default=None,
        help=f"File path or http(s) URL of the document (default: {settings.data_location})",
    )
    parser.add_argument("--width", type=float, default=settings.viewport_width)
    parser.add_argument("--height", type=float, default=settings.viewport_height)
    parser.add_argument("--zoom", type=float, default=1.0, help="Zoom factor around the center")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--collapse-all", action="store_true")
    group.add_argument("--expand-all", action="store_true")
    parser.add_argument("--pretty", action="store_true", help="Indent JSON output")

    args = parser.parse_args()
    return await compute_layout(args)


if __name__ == "__main__":
    success = asyncio.run(main())
    sys.exit(0 if success else 1)
