"""Move policies: how each snake picks its next direction."""

from __future__ import annotations

import logging
from collections import deque

import numpy as np

from snake_arena.snake import Direction, opposite

logger = logging.getLogger(__name__)


class Policy:
    """Base class for move policies.

    :meth:`decide` receives a read-only snapshot of the session with the
    calling snake's own entry under ``"self"`` and returns a
    :class:`Direction`, or ``None`` to pass. Policies never raise.
    """

    def decide(self, snapshot: dict) -> Direction | None:
        return None


class PlayerPolicy(Policy):
    """Externally driven policy fed by an intent queue.

    Intents are pushed by an input adapter. Each decision consumes the
    oldest queued intent; with an empty queue the previous direction is
    repeated, so a single key press keeps the snake moving.
    """

    def __init__(self, max_queued: int | None = None) -> None:
        self.intents: deque[Direction] = deque(maxlen=max_queued)
        self.last_direction: Direction | None = None

    def push_intent(self, direction: Direction | str | None) -> None:
        """Queue a direction. ``None`` and ``"none"`` are ignored."""
        if direction is None:
            return
        if isinstance(direction, str) and direction.strip().lower() == "none":
            return
        self.intents.append(Direction.parse(direction))

    def clear(self) -> None:
        self.intents.clear()

    def decide(self, snapshot: dict) -> Direction | None:
        if self.intents:
            self.last_direction = self.intents.popleft()
        return self.last_direction


class RandomWalkPolicy(Policy):
    """Autonomous policy that wanders at random.

    Never reverses onto its own neck and never steps straight off the
    board edge. When cornered it repeats its last direction and lets the
    engine eliminate it.
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.last_direction: Direction | None = None

    def candidates(self, snapshot: dict) -> list[Direction]:
        """Directions still allowed from the current head."""
        head_x, head_y = snapshot["self"]["body"][-1]
        width = snapshot["board"]["width"]
        height = snapshot["board"]["height"]

        moves: list[Direction] = []
        for direction in Direction:
            if (
                self.last_direction is not None
                and direction == opposite(self.last_direction)
            ):
                continue
            dx, dy = direction.value
            if not (0 <= head_x + dx < width and 0 <= head_y + dy < height):
                continue
            moves.append(direction)
        return moves

    def decide(self, snapshot: dict) -> Direction | None:
        moves = self.candidates(snapshot)
        if moves:
            self.last_direction = moves[int(self.rng.integers(len(moves)))]
        else:
            logger.debug("Snake %s is cornered.", snapshot["self"]["id"])
        return self.last_direction
