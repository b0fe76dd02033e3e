"""
Game Configuration

Tunable constants of the simulation, bundled so a game can be reproduced
from a single object.
"""

from dataclasses import dataclass, asdict
from typing import Optional

from arena.errors import ConfigurationError


@dataclass
class GameConfig:
    """Configuration for one game instance"""
    food_count: int = 1
    life_decrement: float = 0.02
    vision_depth: int = 3
    cap_blocked: bool = True
    min_size: int = 5
    max_workers: Optional[int] = None
    placement_attempts: int = 10000

    def validate(self):
        """Raise ConfigurationError for values the engine cannot run with"""
        if self.food_count < 0:
            raise ConfigurationError(f"food_count must be >= 0, got {self.food_count}")
        if not 0 < self.life_decrement <= 1:
            raise ConfigurationError(
                f"life_decrement must be in (0, 1], got {self.life_decrement}"
            )
        if self.vision_depth < 1:
            raise ConfigurationError(f"vision_depth must be >= 1, got {self.vision_depth}")
        if self.min_size < 3:
            raise ConfigurationError(f"min_size must be >= 3, got {self.min_size}")
        if self.placement_attempts < 1:
            raise ConfigurationError(
                f"placement_attempts must be >= 1, got {self.placement_attempts}"
            )

    def to_dict(self) -> dict:
        return asdict(self)
