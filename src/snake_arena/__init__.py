"""Snake Arena — turn-based multi-snake game core."""

from snake_arena.config import FoodTiming, SessionConfig
from snake_arena.engine import EliminationCause, TurnEngine
from snake_arena.errors import ConfigurationError, EmptyBodyError
from snake_arena.food import FoodPool
from snake_arena.grid import Board
from snake_arena.policy import PlayerPolicy, Policy, RandomWalkPolicy
from snake_arena.session import GameSession, SessionStatus
from snake_arena.snake import Direction, Snake

__all__ = [
    "Board",
    "ConfigurationError",
    "Direction",
    "EliminationCause",
    "EmptyBodyError",
    "FoodPool",
    "FoodTiming",
    "GameSession",
    "PlayerPolicy",
    "Policy",
    "RandomWalkPolicy",
    "SessionConfig",
    "SessionStatus",
    "Snake",
    "TurnEngine",
]
