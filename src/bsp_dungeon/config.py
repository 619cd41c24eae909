from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from importlib.resources import files as resource_files

import yaml

from .errors import ConfigurationError
from .partition import min_root_extent
from .rng import Seed
from .rooms import min_container_extent

logger = logging.getLogger(__name__)

SPLIT_DEPTH_RANGE = (1, 6)
CORRIDOR_THICKNESS_RANGE = (1, 4)
DEFAULT_MIN_ROOM_INSET = 2

ENV_PREFIX = "BSP_"


def _check_int(name: str, value: Any, low: Optional[int], high: Optional[int], problems: List[str]) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        problems.append(f"{name} must be an integer, got {value!r}")
        return
    if low is not None and value < low:
        problems.append(f"{name} must be >= {low}, got {value}")
    if high is not None and value > high:
        problems.append(f"{name} must be <= {high}, got {value}")


def min_dungeon_size(split_depth: int, min_room_inset: int) -> int:
    """Smallest dungeon side that always partitions to ``split_depth``.

    Every leaf must be wide and tall enough to hold a room inset by
    ``min_room_inset``; below this size some draws leave no valid cut.
    """
    return min_root_extent(split_depth, min_container_extent(min_room_inset))


@dataclass(frozen=True)
class GenerationConfig:
    """Settings for one generation pass.

    Ranges:
        dungeon_size: side of the square dungeon in cells. Must be at least
            ``min_dungeon_size(split_depth, min_room_inset)`` so every branch
            can split to the full depth with room for an inset room.
        split_depth: 1..6 partition levels (2**depth leaves).
        corridor_thickness: 1..4 cells.
        min_room_inset: smallest gap between a room and its container's low edges.
        seed: optional int or str; None draws a fresh layout every time.

    Invalid values raise ConfigurationError on construction, before any tree
    or canvas work happens.
    """

    dungeon_size: int = 64
    split_depth: int = 3
    corridor_thickness: int = 1
    min_room_inset: int = DEFAULT_MIN_ROOM_INSET
    seed: Seed = None

    def __post_init__(self) -> None:
        problems: List[str] = []
        _check_int("dungeon_size", self.dungeon_size, 1, None, problems)
        _check_int("split_depth", self.split_depth, *SPLIT_DEPTH_RANGE, problems)
        _check_int("corridor_thickness", self.corridor_thickness, *CORRIDOR_THICKNESS_RANGE, problems)
        _check_int("min_room_inset", self.min_room_inset, 1, None, problems)
        if not problems:
            smallest = min_dungeon_size(self.split_depth, self.min_room_inset)
            if self.dungeon_size < smallest:
                problems.append(
                    f"dungeon_size must be >= {smallest} for split_depth {self.split_depth} "
                    f"and min_room_inset {self.min_room_inset}, got {self.dungeon_size}"
                )
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, (int, str))):
            problems.append(f"seed must be an int or str, got {self.seed!r}")
        if problems:
            for problem in problems:
                logger.error("Invalid generation config: %s", problem)
            raise ConfigurationError("Invalid generation config", problems)

    @property
    def leaf_count(self) -> int:
        return 2 ** self.split_depth

    def with_overrides(self, **overrides: Any) -> "GenerationConfig":
        """Return a validated copy with ``None`` overrides ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "GenerationConfig":
        """Build a config from a plain mapping (e.g. parsed YAML).

        Unknown keys are rejected so typos don't silently fall back to defaults.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(str(k) for k in raw if k not in known)
        if unknown:
            raise ConfigurationError(
                "Unknown generation config keys", [f"unexpected key '{k}'" for k in unknown]
            )
        return cls(**{str(k): v for k, v in raw.items()})

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, base: Optional["GenerationConfig"] = None) -> "GenerationConfig":
        """Layer environment variables over ``base`` (defaults if omitted).

        Recognized: {prefix}DUNGEON_SIZE, {prefix}SPLIT_DEPTH,
        {prefix}CORRIDOR_THICKNESS, {prefix}MIN_ROOM_INSET, {prefix}SEED.
        """
        base = base or cls()
        overrides: Dict[str, Any] = {}
        problems: List[str] = []
        for name in ("dungeon_size", "split_depth", "corridor_thickness", "min_room_inset"):
            key = f"{prefix}{name.upper()}"
            value = os.getenv(key)
            if value is None or value.strip() == "":
                continue
            try:
                overrides[name] = int(value)
            except ValueError:
                problems.append(f"{key} must be an integer, got {value!r}")
        seed = os.getenv(f"{prefix}SEED")
        if seed is not None and seed.strip():
            seed = seed.strip()
            try:
                overrides["seed"] = int(seed)
            except ValueError:
                overrides["seed"] = seed
        if problems:
            raise ConfigurationError("Invalid environment configuration", problems)
        if overrides:
            logger.debug("Config overrides from environment: %s", overrides)
        return base.with_overrides(**overrides)


def load_config(path: Optional[Union[str, Path]] = None) -> GenerationConfig:
    """Load generation settings from YAML.

    If path is None, loads the embedded default resource at
    bsp_dungeon/data/default.yaml. The file may hold the settings at top level
    or under a ``dungeon:`` key.
    """
    if path is None:
        data = resource_files("bsp_dungeon.data").joinpath("default.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded default dungeon config")
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        data = config_path.read_text(encoding="utf-8")
        logger.debug("Loaded dungeon config from path: %s", config_path)

    try:
        raw = yaml.safe_load(data) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Config is not valid YAML: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ConfigurationError("Config must be a mapping of settings")
    section = raw.get("dungeon", raw)
    if not isinstance(section, Mapping):
        raise ConfigurationError("[dungeon] section must be a mapping")
    config = GenerationConfig.from_mapping(section)
    logger.info(
        "Dungeon config: size=%d depth=%d thickness=%d inset=%d",
        config.dungeon_size,
        config.split_depth,
        config.corridor_thickness,
        config.min_room_inset,
    )
    return config


__all__ = [
    "GenerationConfig",
    "load_config",
    "min_dungeon_size",
    "SPLIT_DEPTH_RANGE",
    "CORRIDOR_THICKNESS_RANGE",
    "DEFAULT_MIN_ROOM_INSET",
]
