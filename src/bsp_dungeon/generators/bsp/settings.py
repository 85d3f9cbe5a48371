"""
Generation settings for the BSP dungeon generator.

Settings are plain dataclasses that can be built from dictionaries and
persisted as JSON, so a layout can be regenerated from the file that
produced it.
"""

from __future__ import annotations
import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .corridor_generator import DEFAULT_WALL_CLEARANCE

logger = logging.getLogger(__name__)


BOTTOM_CORNER_MODIFIER_RANGE = (0.0, 0.3)
TOP_CORNER_MODIFIER_RANGE = (0.7, 1.0)


class DungeonConfigError(ValueError):
    """Raised when generation parameters violate the generator's contract"""


@dataclass
class DungeonSettings:
    """All parameters of one dungeon generation request"""
    dungeon_width: int = 60
    dungeon_length: int = 60
    max_iterations: int = 10
    room_width_min: int = 6
    room_length_min: int = 6
    room_bottom_corner_modifier: float = 0.1
    room_top_corner_modifier: float = 0.9
    room_offset: int = 1
    corridor_width: int = 2
    wall_clearance: int = DEFAULT_WALL_CLEARANCE

    # None = fresh entropy on every run
    seed: Optional[int] = None

    def validate(self) -> 'DungeonSettings':
        """
        Check every parameter, failing on the first violation.

        Returns:
            Self for chaining

        Raises:
            DungeonConfigError: If a parameter is out of range
        """
        for name in ('dungeon_width', 'dungeon_length', 'max_iterations', 'room_width_min',
                     'room_length_min', 'room_offset', 'corridor_width', 'wall_clearance'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise DungeonConfigError(f"{name} must be an integer, got {value!r}")

        if self.dungeon_width <= 0 or self.dungeon_length <= 0:
            raise DungeonConfigError(
                f"Dungeon size must be positive, got {self.dungeon_width}x{self.dungeon_length}")
        if self.max_iterations < 0:
            raise DungeonConfigError(f"max_iterations must be >= 0, got {self.max_iterations}")
        if self.room_width_min <= 0:
            raise DungeonConfigError(f"room_width_min must be > 0, got {self.room_width_min}")
        if self.room_length_min <= 0:
            raise DungeonConfigError(f"room_length_min must be > 0, got {self.room_length_min}")

        for name in ('room_bottom_corner_modifier', 'room_top_corner_modifier'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise DungeonConfigError(f"{name} must be a number, got {value!r}")

        low, high = BOTTOM_CORNER_MODIFIER_RANGE
        if not low <= self.room_bottom_corner_modifier <= high:
            raise DungeonConfigError(
                f"room_bottom_corner_modifier must be in [{low}, {high}], "
                f"got {self.room_bottom_corner_modifier}")
        low, high = TOP_CORNER_MODIFIER_RANGE
        if not low <= self.room_top_corner_modifier <= high:
            raise DungeonConfigError(
                f"room_top_corner_modifier must be in [{low}, {high}], "
                f"got {self.room_top_corner_modifier}")

        if self.room_offset < 0:
            raise DungeonConfigError(f"room_offset must be >= 0, got {self.room_offset}")
        # Leaves are never narrower than the smaller of the minimum and the dungeon itself
        smallest_leaf = min(self.room_width_min, self.room_length_min,
                            self.dungeon_width, self.dungeon_length)
        if self.room_offset * 2 >= smallest_leaf:
            raise DungeonConfigError(
                f"room_offset {self.room_offset} leaves no space in partitions "
                f"as small as {smallest_leaf}")

        if self.corridor_width <= 0:
            raise DungeonConfigError(f"corridor_width must be > 0, got {self.corridor_width}")
        if self.wall_clearance < 0:
            raise DungeonConfigError(f"wall_clearance must be >= 0, got {self.wall_clearance}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise DungeonConfigError(f"seed must be an integer or None, got {self.seed!r}")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DungeonSettings':
        """
        Build settings from a dictionary, keeping defaults for missing keys.

        Raises:
            DungeonConfigError: If data contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise DungeonConfigError(f"Unknown setting(s): {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_settings(path: Union[str, Path]) -> DungeonSettings:
    """
    Load and validate settings from a JSON file.

    Raises:
        DungeonConfigError: If the file is not a JSON object or holds invalid values
        OSError: If the file cannot be read
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise DungeonConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise DungeonConfigError(f"Settings file {path} must contain a JSON object")

    logger.debug(f"Loaded settings from {path}")
    return DungeonSettings.from_dict(data).validate()


def save_settings(settings: DungeonSettings, path: Union[str, Path]) -> Path:
    """Write settings to a JSON file, creating parent directories"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2), encoding='utf-8')
    logger.info(f"Saved settings to {path}")
    return path
