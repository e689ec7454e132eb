"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from snake_arena.errors import ConfigurationError

if TYPE_CHECKING:
    from snake_arena.grid import Coordinate

logger = logging.getLogger(__name__)


class FoodPool:
    """The set of uneaten food cells.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Positions keep insertion order so snapshots are stable.
    """

    def __init__(
        self,
        target: int,
        rng: np.random.Generator | None = None,
    ) -> None:
        if target < 0:
            raise ConfigurationError("Food target must not be negative.")
        self.target = target
        self.rng = rng if rng is not None else np.random.default_rng()
        self.positions: list[Coordinate] = []

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, pos: object) -> bool:
        return pos in self.positions

    def replenish(
        self,
        empty_cells: Sequence[Coordinate],
        target: int | None = None,
    ) -> list[Coordinate]:
        """Top the pool up to *target* from *empty_cells*.

        Draws without replacement. Adds fewer cells when not enough are
        free. Returns the newly placed positions.
        """
        goal = self.target if target is None else target
        missing = goal - len(self.positions)
        if missing <= 0:
            return []

        available = [pos for pos in empty_cells if pos not in self.positions]
        if len(available) < missing:
            logger.warning(
                "Only %d empty cells for %d missing food.",
                len(available), missing,
            )
        needed = min(missing, len(available))
        if needed <= 0:
            return []

        indices = self.rng.choice(len(available), size=needed, replace=False)
        placed: list[Coordinate] = []
        for idx in indices:
            pos = available[int(idx)]
            self.positions.append(pos)
            placed.append(pos)
        return placed

    def remove(self, x: int, y: int) -> bool:
        """Remove food at the given position. Returns True if removed."""
        pos = (x, y)
        if pos in self.positions:
            self.positions.remove(pos)
            return True
        return False

    def to_list(self) -> list[list[int]]:
        return [list(p) for p in self.positions]
