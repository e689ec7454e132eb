"""Session configuration."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from snake_arena.errors import ConfigurationError
from snake_arena.snake import DEFAULT_HEALTH

logger = logging.getLogger(__name__)


class FoodTiming(enum.Enum):
    """Which head position is checked for food on a move.

    ``LEAVE`` eats the food the snake was standing on before moving;
    ``ENTER`` eats the food on the cell being moved into.
    """

    LEAVE = "leave"
    ENTER = "enter"


@dataclass(frozen=True)
class SessionConfig:
    """Settings fixed for the lifetime of a game session.

    Supports JSON serialization for reproducibility.
    """

    width: int
    height: int
    agent_count: int
    food_count: int
    food_score: int
    move_cost: int
    starting_health: int = 0
    food_timing: FoodTiming = FoodTiming.LEAVE
    intent_queue_limit: int | None = None
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ConfigurationError("width and height must be positive.")
        if self.agent_count < 1:
            raise ConfigurationError("agent_count must be at least 1.")
        if self.agent_count > self.width * self.height:
            raise ConfigurationError(
                "agent_count exceeds the number of board cells."
            )
        if self.food_count < 0:
            raise ConfigurationError("food_count must not be negative.")
        if self.food_score < 0:
            raise ConfigurationError("food_score must not be negative.")
        if self.move_cost < 0:
            raise ConfigurationError("move_cost must not be negative.")
        if self.starting_health < 0:
            raise ConfigurationError("starting_health must not be negative.")
        if self.intent_queue_limit is not None and self.intent_queue_limit < 1:
            raise ConfigurationError("intent_queue_limit must be at least 1.")
        if not isinstance(self.food_timing, FoodTiming):
            try:
                object.__setattr__(
                    self, "food_timing", FoodTiming(self.food_timing),
                )
            except ValueError:
                raise ConfigurationError(
                    f"Unknown food_timing {self.food_timing!r}."
                ) from None

    @property
    def effective_starting_health(self) -> int:
        return self.starting_health or DEFAULT_HEALTH

    def to_dict(self) -> dict:
        d = asdict(self)
        d["food_timing"] = self.food_timing.value
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> SessionConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        try:
            return cls(**raw)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc
