"""Game session: owns the board, snakes, food, and turn counter."""

from __future__ import annotations

import copy
import enum
import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass

import numpy as np

from snake_arena.config import SessionConfig
from snake_arena.engine import EliminationCause, TurnEngine
from snake_arena.food import FoodPool
from snake_arena.grid import Board, Coordinate
from snake_arena.policy import PlayerPolicy, RandomWalkPolicy
from snake_arena.snake import Direction, Snake, new_id

logger = logging.getLogger(__name__)

GAME_OVER = "Game Over!"

Observer = Callable[[dict], None]


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a session."""

    RUNNING = "running"
    ENDED = "ended"


@dataclass(frozen=True)
class Elimination:
    """A single snake leaving play."""

    turn: int
    snake_id: str
    name: str
    cause: EliminationCause

    def to_dict(self) -> dict:
        d = asdict(self)
        d["cause"] = self.cause.value
        return d


class GameSession:
    """A single game from spawn to game over.

    The session is the only owner of mutable game state. Policies and
    observers receive deep-copied snapshots, and all mutation happens
    inside :meth:`advance_round` through the :class:`TurnEngine`.
    """

    def __init__(
        self,
        config: SessionConfig,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config
        self.id = new_id()
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.board = Board(config.width, config.height)
        self.engine = TurnEngine(config)

        self.turn = 0
        self.status = SessionStatus.RUNNING
        self.end_reason: str | None = None
        self.agents: list[Snake] = []
        self.eliminations: list[Elimination] = []
        self.food = FoodPool(config.food_count, rng=self.rng)
        self._observers: list[Observer] = []

        self._spawn_agents()
        self.replenish_food()
        logger.info(
            "Session %s created (%dx%d, %d snakes, %d food).",
            self.id, config.width, config.height,
            len(self.agents), len(self.food),
        )

    def _spawn_agents(self) -> None:
        """Player in the centre, autonomous snakes on random empty cells."""
        cfg = self.config
        health = cfg.effective_starting_health
        self.primary = Snake(
            cfg.width // 2,
            cfg.height // 2,
            style="user1",
            health=health,
            policy=PlayerPolicy(max_queued=cfg.intent_queue_limit),
        )
        self.agents.append(self.primary)

        empty = self.board.empty_cells(self.occupied_cells())
        count = min(cfg.agent_count - 1, len(empty))
        if count <= 0:
            return
        indices = self.rng.choice(len(empty), size=count, replace=False)
        for i, idx in enumerate(indices):
            x, y = empty[int(idx)]
            self.agents.append(
                Snake(
                    x, y,
                    style=f"robot{i + 1}",
                    health=health,
                    policy=RandomWalkPolicy(self.rng),
                )
            )

    @property
    def ended(self) -> bool:
        return self.status == SessionStatus.ENDED

    def occupied_cells(self) -> set[Coordinate]:
        cells: set[Coordinate] = set()
        for snake in self.agents:
            cells.update(snake.body)
        return cells

    def replenish_food(self) -> list[Coordinate]:
        """Top up food from cells free of both snakes and food."""
        occupied = self.occupied_cells()
        occupied.update(self.food.positions)
        return self.food.replenish(self.board.empty_cells(occupied))

    def push_intent(self, direction: Direction | str | None) -> None:
        """Queue a direction for the primary snake."""
        policy = self.primary.policy
        if not isinstance(policy, PlayerPolicy):
            raise ValueError("Primary snake is not player-driven.")
        policy.push_intent(direction)

    def advance_round(self) -> dict:
        """Advance the game by one round and return the new snapshot.

        Does nothing once the session has ended.
        """
        if self.ended:
            return self.snapshot()
        self.engine.run_round(self)
        state = self.snapshot()
        self._notify(state)
        return state

    def eliminate(self, snake: Snake, cause: EliminationCause) -> None:
        """Remove *snake* from play, ending the game if it is the primary."""
        snake.alive = False
        self.eliminations.append(
            Elimination(self.turn, snake.id, snake.style, cause)
        )
        logger.info(
            "Snake %s (%s) eliminated on turn %d: %s.",
            snake.id, snake.style, self.turn, cause.value,
        )
        if snake is self.primary:
            self.stop(GAME_OVER)
        else:
            self.agents.remove(snake)

    def stop(self, reason: str = GAME_OVER) -> None:
        """End the session. Later rounds have no effect."""
        if self.ended:
            return
        self.status = SessionStatus.ENDED
        self.end_reason = reason
        logger.info("Session %s ended on turn %d: %s", self.id, self.turn, reason)
        self._notify(self.snapshot())

    def add_observer(self, observer: Observer) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, state: dict) -> None:
        for observer in list(self._observers):
            observer(copy.deepcopy(state))

    def snapshot(self, viewer: Snake | None = None) -> dict:
        """Return a detached view of the session.

        With *viewer* set, its own entry is repeated under ``"self"``.
        """
        state = {
            "game": {"id": self.id},
            "turn": self.turn,
            "status": self.status.value,
            "reason": self.end_reason,
            "board": {
                "width": self.board.width,
                "height": self.board.height,
                "food": self.food.to_list(),
                "agents": [s.info() for s in self.agents],
            },
        }
        if viewer is not None:
            state["self"] = viewer.info()
        return state

    def to_dict(self) -> dict:
        """Full serializable state, including the elimination history."""
        state = self.snapshot()
        state["eliminations"] = [e.to_dict() for e in self.eliminations]
        state["config"] = self.config.to_dict()
        return state
