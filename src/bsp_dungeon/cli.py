from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import GenerationConfig, load_config
from .debug import draw_boundaries, summarize
from .errors import DungeonError
from .generator import DungeonGenerator

logger = logging.getLogger(__name__)


def _seed(value: str):
    try:
        return int(value)
    except ValueError:
        return value


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bsp-dungeon",
        description="Generate a BSP dungeon and print it as ASCII.",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file (defaults to the bundled one).")
    parser.add_argument("--size", type=int, default=None, help="Side of the square dungeon in cells.")
    parser.add_argument("--depth", type=int, default=None, help="Partition depth (1-6).")
    parser.add_argument("--thickness", type=int, default=None, help="Corridor thickness (1-4).")
    parser.add_argument("--inset", type=int, default=None, help="Minimum room inset from its container.")
    parser.add_argument("--seed", type=_seed, default=None, help="Integer or string seed.")
    parser.add_argument("--show-containers", action="store_true", help="Overlay partition container outlines.")
    parser.add_argument("--format", choices=("ascii", "summary"), default="ascii", help="Output format.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> GenerationConfig:
    """Settings precedence: YAML file < BSP_* environment < command line."""
    base = load_config(args.config)
    base = GenerationConfig.from_env(base=base)
    return base.with_overrides(
        dungeon_size=args.size,
        split_depth=args.depth,
        corridor_thickness=args.thickness,
        min_room_inset=args.inset,
        seed=args.seed,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
        layout = DungeonGenerator().generate(config)
    except DungeonError as exc:
        logger.error("%s", exc.to_human())
        return 2

    if args.format == "summary":
        payload = {"config": config.to_dict(), "tree": summarize(layout.root)}
        print(json.dumps(payload, indent=2, sort_keys=True))
        return 0

    lines = layout.canvas.to_lines(empty=" ")
    if args.show_containers:
        lines = draw_boundaries(layout.root, config.dungeon_size, rooms=False, base=lines)
    print("\n".join(lines))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
