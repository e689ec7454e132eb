"""Snake entity and movement directions."""

from __future__ import annotations

import enum
import uuid
from collections import deque
from typing import TYPE_CHECKING

from snake_arena.errors import EmptyBodyError

if TYPE_CHECKING:
    from snake_arena.grid import Coordinate
    from snake_arena.policy import Policy

DEFAULT_HEALTH = 100


class Direction(enum.Enum):
    """Cardinal movement directions with (x_delta, y_delta) values."""

    LEFT = (-1, 0)
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)

    @classmethod
    def parse(cls, value: str | Direction) -> Direction:
        """Resolve a direction from its name, e.g. ``"left"``."""
        if isinstance(value, Direction):
            return value
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction {value!r}.") from None

    @property
    def label(self) -> str:
        return self.name.lower()


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def opposite(direction: Direction) -> Direction:
    """Return the direction pointing the other way."""
    return _OPPOSITES[direction]


def new_id() -> str:
    return uuid.uuid4().hex[:12]


class Snake:
    """A snake whose body is an ordered deque of (x, y) cells.

    The tail is ``body[0]``; the head is ``body[-1]``. Health is adjusted
    by the turn engine, never by the snake itself.
    """

    def __init__(
        self,
        x: int,
        y: int,
        style: str = "",
        health: int | None = None,
        policy: Policy | None = None,
    ) -> None:
        self.id = new_id()
        self.body: deque[Coordinate] = deque()
        self.style = style
        self.health = health or DEFAULT_HEALTH
        self.policy = policy
        self.last_direction: Direction | None = None
        self.alive = True
        self.grow(x, y)

    @property
    def head(self) -> Coordinate:
        return self.body[-1]

    @property
    def tail(self) -> Coordinate:
        return self.body[0]

    @property
    def length(self) -> int:
        return len(self.body)

    def grow(self, x: int, y: int) -> None:
        """Append a new head cell without any validation."""
        self.body.append((x, y))

    def shrink_tail(self) -> Coordinate:
        """Remove and return the oldest body cell."""
        if len(self.body) <= 1:
            raise EmptyBodyError(
                f"Snake {self.id} cannot drop its only body cell."
            )
        return self.body.popleft()

    def contains_point(self, x: int, y: int) -> bool:
        """Check whether the snake occupies a given cell."""
        return (x, y) in self.body

    def info(self) -> dict:
        """Public view of this snake, safe to hand to policies."""
        return {
            "id": self.id,
            "name": self.style,
            "health": self.health,
            "body": [list(seg) for seg in self.body],
        }

    def __repr__(self) -> str:
        return (
            f"Snake(id={self.id!r}, style={self.style!r}, "
            f"length={self.length}, health={self.health})"
        )
