"""Turn resolution: one round of sequential snake moves."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from snake_arena.config import FoodTiming, SessionConfig

if TYPE_CHECKING:
    from snake_arena.session import GameSession
    from snake_arena.snake import Direction, Snake

logger = logging.getLogger(__name__)


class EliminationCause(enum.Enum):
    """Why a snake was removed from play."""

    WALL = "wall"
    BOARD_FULL = "board_full"
    STARVATION = "starvation"
    COLLISION = "collision"


class TurnEngine:
    """Applies the movement rules to a session, one round per call.

    Snakes move one after another in registration order. A snake that
    has already moved this round occupies its new cells when later snakes
    are checked; snakes yet to move still occupy their old cells.
    """

    def __init__(self, config: SessionConfig) -> None:
        self.move_cost = config.move_cost
        self.food_score = config.food_score
        self.food_timing = config.food_timing

    def run_round(self, session: GameSession) -> None:
        """Resolve one move attempt for every live snake."""
        if session.ended:
            return

        for snake in list(session.agents):
            if session.ended:
                break
            if not snake.alive:
                continue

            snapshot = session.snapshot(viewer=snake)
            direction = snake.policy.decide(snapshot) if snake.policy else None
            if direction is None:
                logger.debug("Snake %s passes on turn %d.", snake.id, session.turn)
                continue

            if self._move(session, snake, direction):
                session.replenish_food()

        session.turn += 1

    def _move(
        self, session: GameSession, snake: Snake, direction: Direction,
    ) -> bool:
        """Move *snake* one cell. Returns False if it was eliminated."""
        board = session.board
        snake.health -= self.move_cost

        dx, dy = direction.value
        head_x, head_y = snake.head
        next_x, next_y = head_x + dx, head_y + dy

        # --- wall, full board, starvation ---
        if not board.in_bounds(next_x, next_y):
            session.eliminate(snake, EliminationCause.WALL)
            return False
        if snake.length >= board.total_cells():
            session.eliminate(snake, EliminationCause.BOARD_FULL)
            return False
        if snake.health <= 0:
            session.eliminate(snake, EliminationCause.STARVATION)
            return False

        # --- bodies, own included, as they stand right now ---
        for other in session.agents:
            if other.contains_point(next_x, next_y):
                session.eliminate(snake, EliminationCause.COLLISION)
                return False

        if self.food_timing == FoodTiming.LEAVE:
            food_x, food_y = head_x, head_y
        else:
            food_x, food_y = next_x, next_y
        ate = session.food.remove(food_x, food_y)

        # Grow first so a length-1 snake still has a cell to drop.
        snake.grow(next_x, next_y)
        if ate:
            snake.health += self.food_score
        else:
            snake.shrink_tail()
        snake.last_direction = direction

        logger.debug(
            "Snake %s moved %s to (%d, %d)%s.",
            snake.id, direction.label, next_x, next_y,
            " and ate" if ate else "",
        )
        return True
