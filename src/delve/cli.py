from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import GenerationSettings, parse_seed
from .dungeon.connectivity import is_fully_connected
from .dungeon.level import generate_from_settings
from .exceptions import GenerationError
from .fov.discovery import DiscoveryMap
from .render.glyphs import glyph_at, render_ascii

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="delve", description="Generate a dungeon level and print it.")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file overlaid on the defaults")
    parser.add_argument("--seed", type=str, default=None, help="Seed for reproducible levels")
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--rooms", type=int, default=None, help="Room placement attempts")
    parser.add_argument("--radius", type=float, default=None, help="Observer vision radius for --fog")
    parser.add_argument("--fog", action="store_true", help="Only show what an observer on the first up-stair sees")
    parser.add_argument("--json", action="store_true", help="Print a JSON summary instead of the map")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> GenerationSettings:
    base = GenerationSettings.from_env(GenerationSettings.load(args.config))
    return base.replace(
        seed=parse_seed(args.seed) if args.seed is not None else None,
        width=args.width,
        height=args.height,
        room_count=args.rooms,
        vision_radius=args.radius,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        settings = build_settings(args)
        level, exits = generate_from_settings(settings)
    except (GenerationError, ValueError) as exc:
        logger.error("Level generation failed: %s", exc)
        return 1

    if args.json:
        data = {
            "width": level.width,
            "height": level.height,
            "seed": settings.seed,
            "upstairs": [list(p) for p in exits.upstairs],
            "downstairs": [list(p) for p in exits.downstairs],
            "rows": ["".join(glyph_at(level.grid, x, y).value for x in range(level.width)) for y in range(level.height)],
            "connected": is_fully_connected(level.grid),
        }
        # JSON summary so it can be diffed across runs
        print(json.dumps(data, indent=2, sort_keys=True))
        return 0

    if args.fog and exits.upstairs:
        observer = exits.upstairs[0]
        fog = DiscoveryMap(level, vision_radius=settings.vision_radius)
        fog.update(observer)
        logger.info("Observer at %s has discovered %d tiles", observer, fog.known_count)
        sys.stdout.write(render_ascii(level.grid, known=fog.known_cells(), marks={observer: "@"}))
    else:
        if args.fog:
            logger.warning("Level has no up-stairs to stand on; printing the full map")
        sys.stdout.write(str(level))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
