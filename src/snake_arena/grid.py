"""Board geometry for the arena."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from snake_arena.errors import ConfigurationError

Coordinate = tuple[int, int]


class Board:
    """Fixed-size rectangular board addressed by ``(x, y)``.

    ``x`` grows to the right and ``y`` grows downward. The board holds no
    cell state of its own; occupancy is derived on demand from the caller.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise ConfigurationError("Board dimensions must be positive.")
        self.width = width
        self.height = height

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the board."""
        return 0 <= x < self.width and 0 <= y < self.height

    def total_cells(self) -> int:
        return self.width * self.height

    def empty_cells(self, occupied: Iterable[Coordinate]) -> list[Coordinate]:
        """Return every in-bounds cell not listed in *occupied*.

        Cells are returned in row-major order so that seeded sampling over
        the result is reproducible.
        """
        mask = np.ones((self.height, self.width), dtype=bool)
        for x, y in occupied:
            if self.in_bounds(x, y):
                mask[y, x] = False
        ys, xs = np.nonzero(mask)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}
