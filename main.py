"""
Raycast Arena - grid raycaster with a first-person and a top-down view
"""

import argparse
import logging
import sys

from config import GAME_TITLE, GAME_VERSION, PRESETS, DEFAULT_PRESET, build_config
from engine.errors import ArenaError
from game.frame_loop import FrameLoop
from utils.constants import MODE_2D, MODE_3D

logger = logging.getLogger(__name__)


def parse_mode(value):
    """'2d' selects the top-down view, anything else the 3D view"""
    return MODE_2D if str(value).lower() == MODE_2D else MODE_3D


def build_parser():
    parser = argparse.ArgumentParser(
        prog="raycast-arena",
        description=f"{GAME_TITLE} v{GAME_VERSION}",
    )
    parser.add_argument(
        "mode", nargs="?", default=MODE_3D, type=parse_mode,
        help="'2d' for the top-down debug view, '3d' (default) for first person",
    )
    parser.add_argument(
        "--preset", choices=sorted(PRESETS), default=DEFAULT_PRESET,
        help="built-in map and view settings",
    )
    parser.add_argument("--map", dest="map_path", help="JSON map file to play instead")
    parser.add_argument("--rays", type=int, help="number of rays (screen columns)")
    parser.add_argument("--fov", type=float, help="field of view in radians")

    style = parser.add_mutually_exclusive_group()
    style.add_argument("--colors", dest="use_colors", action="store_const", const=True,
                       help="draw walls with flat colors")
    style.add_argument("--textures", dest="use_colors", action="store_const", const=False,
                       help="draw walls with textures")

    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity",
    )
    return parser


def main(argv=None):
    """Entry point"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(
            preset=args.preset,
            map_path=args.map_path,
            rays=args.rays,
            fov=args.fov,
            use_colors=args.use_colors,
        )
        FrameLoop(config, mode=args.mode).run()
    except ArenaError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
