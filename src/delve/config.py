from __future__ import annotations

import dataclasses
import logging
import math
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from .dungeon.corridors import validate_cost_model

logger = logging.getLogger(__name__)


def parse_seed(raw: str) -> Union[int, str]:
    """Numeric seeds stay integers so "42" and 42 produce the same level."""
    try:
        return int(raw)
    except ValueError:
        return raw


# Environment variable -> (field, converter)
ENV_OVERRIDES = {
    "DELVE_WIDTH": ("width", int),
    "DELVE_HEIGHT": ("height", int),
    "DELVE_ROOMS": ("room_count", int),
    "DELVE_SEED": ("seed", parse_seed),
    "DELVE_UP_STAIRS": ("up_stairs", int),
    "DELVE_DOWN_STAIRS": ("down_stairs", int),
    "DELVE_VISION_RADIUS": ("vision_radius", float),
}


@dataclass
class GenerationSettings:
    """Parameters for one level generation call.

    - width/height: level size in tiles.
    - room_count: number of room placement attempts (not a guaranteed count).
    - min_room_size/max_room_size: inclusive room side length range.
    - up_stairs/down_stairs: stair counts to place.
    - seed: optional seed for a reproducible RandomSource.
    - hallway_randomness: R in the stone weight range [1 - R, 1 + R].
    - room_weight: cost of walking through already-open cells.
    - room_margin/room_min_distance: room placement spacing.
    - stair_attempts: samples allowed per stair before generation fails.
    - vision_radius: sight radius used by observers (None = unlimited).
    """

    width: int = 80
    height: int = 24
    room_count: int = 100
    min_room_size: int = 4
    max_room_size: int = 7
    up_stairs: int = 1
    down_stairs: int = 1
    seed: Optional[Union[int, str]] = None
    hallway_randomness: float = 0.5
    room_weight: float = 0.25
    room_margin: int = 1
    room_min_distance: int = 1
    stair_attempts: int = 10_000
    vision_radius: Optional[float] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        if self.room_count < 0:
            raise ValueError("room_count must be >= 0")
        if self.min_room_size <= 0 or self.max_room_size < self.min_room_size:
            raise ValueError("room sizes must satisfy 0 < min_room_size <= max_room_size")
        if self.room_margin < 0 or self.room_min_distance < 0:
            raise ValueError("room_margin and room_min_distance must be >= 0")
        if self.max_room_size + 2 * self.room_margin > min(self.width, self.height):
            raise ValueError("max_room_size plus margins must fit inside the level")
        if self.up_stairs < 0 or self.down_stairs < 0:
            raise ValueError("stair counts must be >= 0")
        if self.stair_attempts <= 0:
            raise ValueError("stair_attempts must be > 0")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, (int, str))):
            raise ValueError("seed must be an integer or a string")
        if self.vision_radius is not None and (not math.isfinite(self.vision_radius) or self.vision_radius < 0):
            raise ValueError("vision_radius must be a finite number >= 0")
        validate_cost_model(self.hallway_randomness, self.room_weight)

    @property
    def grid_size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationSettings":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown generation settings: {', '.join(unknown)}")
        try:
            return cls(**dict(data))
        except TypeError as exc:
            # wrong-typed values from YAML or the environment, e.g. width: "80"
            raise ValueError(f"Invalid generation settings: {exc}") from exc

    @classmethod
    def defaults_data(cls) -> dict:
        """Packaged default settings as a plain dict."""
        try:
            with resources.files("delve.data").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            return dataclasses.asdict(cls())

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "GenerationSettings":
        """Load settings from built-in defaults and an optional user override file.

        If user_path is provided and exists, its values are overlaid onto the
        defaults.
        """
        user_data: Dict[str, Any] = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = {**cls.defaults_data(), **user_data}
        settings = cls.from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    @classmethod
    def from_env(cls, base: Optional["GenerationSettings"] = None) -> "GenerationSettings":
        """Apply DELVE_* environment overrides on top of ``base`` (or the defaults)."""
        data = dataclasses.asdict(base if base is not None else cls.load())
        for var, (name, convert) in ENV_OVERRIDES.items():
            raw = os.environ.get(var)
            if raw is None or raw == "":
                continue
            try:
                data[name] = convert(raw)
            except ValueError as exc:
                raise ValueError(f"Invalid value for {var}: {raw!r}") from exc
            logger.debug("Environment override %s=%r", var, raw)
        return cls.from_dict(data)

    def replace(self, **changes: Any) -> "GenerationSettings":
        """Copy with some fields changed; None values are ignored."""
        return dataclasses.replace(self, **{k: v for k, v in changes.items() if v is not None})

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
