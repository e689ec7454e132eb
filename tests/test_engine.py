"""Tests for round resolution in the TurnEngine."""

from collections import deque

from snake_arena.config import FoodTiming, SessionConfig
from snake_arena.engine import EliminationCause
from snake_arena.policy import Policy
from snake_arena.session import GAME_OVER, GameSession, SessionStatus
from snake_arena.snake import Direction, Snake


class ScriptedPolicy(Policy):
    """Replays a fixed list of moves, then passes."""

    def __init__(self, *moves):
        self.moves = list(moves)
        self.snapshots = []

    def decide(self, snapshot):
        self.snapshots.append(snapshot)
        return self.moves.pop(0) if self.moves else None


def _session(width=3, height=3, **overrides):
    values = {
        "width": width,
        "height": height,
        "agent_count": 1,
        "food_count": 0,
        "food_score": 100,
        "move_cost": 1,
        "seed": 0,
    }
    values.update(overrides)
    return GameSession(SessionConfig(**values))


def _place(snake, *cells):
    snake.body = deque(cells)


def _add_robot(session, *cells, moves=()):
    robot = Snake(*cells[0], style="robot", policy=ScriptedPolicy(*moves))
    _place(robot, *cells)
    session.agents.append(robot)
    return robot


class TestFoodConsumption:
    def test_eat_on_enter(self):
        session = _session(food_timing=FoodTiming.ENTER)
        snake = session.primary
        _place(snake, (1, 1))
        session.food.positions.append((2, 1))
        session.push_intent(Direction.RIGHT)

        session.advance_round()

        assert snake.head == (2, 1)
        assert snake.length == 2
        assert snake.health == 199
        assert (2, 1) not in session.food

    def test_eat_on_leave_waits_for_next_move(self):
        session = _session()
        snake = session.primary
        _place(snake, (1, 1))
        session.food.positions.append((2, 1))
        session.push_intent("right")
        session.push_intent("down")

        session.advance_round()
        assert snake.head == (2, 1)
        assert snake.length == 1
        assert snake.health == 99
        assert (2, 1) in session.food

        session.advance_round()
        assert list(snake.body) == [(2, 1), (2, 2)]
        assert snake.health == 198
        assert (2, 1) not in session.food

    def test_moving_without_food_keeps_length(self):
        session = _session(width=5, height=5)
        snake = session.primary
        _place(snake, (1, 2), (2, 2))
        session.push_intent("right")
        session.advance_round()
        assert list(snake.body) == [(2, 2), (3, 2)]
        assert snake.last_direction == Direction.RIGHT

    def test_food_replenished_after_eating(self):
        session = _session(width=5, height=5, food_count=1,
                           food_timing=FoodTiming.ENTER)
        snake = session.primary
        session.food.positions[:] = [(3, 2)]
        session.push_intent("right")
        session.advance_round()
        assert snake.length == 2
        assert len(session.food) == 1
        assert (3, 2) not in session.food
        assert not any(snake.contains_point(*p) for p in session.food.positions)


class TestEliminationRules:
    def test_wall(self):
        session = _session()
        _place(session.primary, (0, 1))
        session.push_intent("left")
        session.advance_round()
        assert session.status == SessionStatus.ENDED
        assert session.eliminations[0].cause == EliminationCause.WALL

    def test_wall_removes_robot(self):
        session = _session(width=5, height=5)
        robot = _add_robot(session, (4, 0), moves=[Direction.UP])
        session.advance_round()
        assert robot not in session.agents
        assert not robot.alive
        assert session.status == SessionStatus.RUNNING
        assert session.eliminations[0].snake_id == robot.id

    def test_board_full(self):
        session = _session(width=2, height=1)
        _place(session.primary, (0, 0), (1, 0))
        session.push_intent("left")
        session.advance_round()
        assert session.eliminations[0].cause == EliminationCause.BOARD_FULL

    def test_starvation_at_zero(self):
        session = _session(width=5, height=5)
        session.primary.health = 1
        session.push_intent("up")
        session.advance_round()
        assert session.primary.health == 0
        assert session.eliminations[0].cause == EliminationCause.STARVATION

    def test_self_collision_with_own_tail(self):
        session = _session()
        _place(session.primary, (1, 1), (2, 1))
        session.push_intent("left")
        session.advance_round()
        assert session.eliminations[0].cause == EliminationCause.COLLISION
        assert session.primary.head == (2, 1)

    def test_collision_with_other_body(self):
        session = _session(width=5, height=5)
        _place(session.primary, (0, 0))
        robot = _add_robot(session, (2, 3), moves=[Direction.RIGHT])
        _add_robot(session, (3, 3), (3, 4))
        session.advance_round()
        assert robot not in session.agents
        assert session.eliminations[0].cause == EliminationCause.COLLISION

    def test_wall_checked_before_starvation(self):
        session = _session()
        _place(session.primary, (0, 1))
        session.primary.health = 1
        session.push_intent("left")
        session.advance_round()
        assert session.eliminations[0].cause == EliminationCause.WALL


class TestRoundOrdering:
    def test_occupied_tail_of_later_mover_blocks(self):
        session = _session(width=5, height=5)
        _place(session.primary, (0, 0))
        mover = _add_robot(session, (1, 2), moves=[Direction.RIGHT])
        target = _add_robot(session, (2, 2), (3, 2), moves=[Direction.RIGHT])

        session.advance_round()

        assert mover not in session.agents
        assert target in session.agents
        assert list(target.body) == [(3, 2), (4, 2)]

    def test_cell_vacated_by_earlier_mover_is_free(self):
        session = _session(width=5, height=5)
        _place(session.primary, (4, 4))
        first = _add_robot(session, (1, 1), (2, 1), moves=[Direction.DOWN])
        second = _add_robot(session, (0, 1), moves=[Direction.RIGHT])

        session.advance_round()

        assert list(first.body) == [(2, 1), (2, 2)]
        assert list(second.body) == [(1, 1)]
        assert session.eliminations == []

    def test_earlier_mover_claims_cell(self):
        session = _session(width=5, height=5)
        _place(session.primary, (0, 0))
        first = _add_robot(session, (2, 1), moves=[Direction.DOWN])
        second = _add_robot(session, (3, 2), moves=[Direction.LEFT])

        session.advance_round()

        assert first.head == (2, 2)
        assert second not in session.agents

    def test_later_snake_sees_earlier_move_in_snapshot(self):
        session = _session(width=5, height=5)
        _place(session.primary, (0, 0))
        _add_robot(session, (2, 1), moves=[Direction.DOWN])
        watcher = _add_robot(session, (4, 4))

        session.advance_round()

        seen = watcher.policy.snapshots[0]["board"]["agents"][1]["body"]
        assert seen == [[2, 2]]

    def test_removed_robot_no_longer_blocks(self):
        session = _session(width=5, height=5)
        _place(session.primary, (0, 0))
        _add_robot(session, (4, 2), moves=[Direction.RIGHT])
        follower = _add_robot(session, (4, 3), moves=[Direction.UP])

        session.advance_round()

        assert follower.head == (4, 2)
        assert len(session.eliminations) == 1


class TestPrimaryElimination:
    def test_primary_starvation_ends_round(self):
        session = _session(width=5, height=5)
        session.primary.health = 1
        robot = _add_robot(session, (0, 0), moves=[Direction.RIGHT])
        session.push_intent("up")

        session.advance_round()

        assert session.status == SessionStatus.ENDED
        assert session.end_reason == GAME_OVER
        assert robot.policy.snapshots == []
        assert list(robot.body) == [(0, 0)]
        assert session.primary in session.agents
        assert session.turn == 1

    def test_no_mutation_after_end(self):
        session = _session()
        _place(session.primary, (0, 1))
        session.push_intent("left")
        session.push_intent("right")
        session.advance_round()
        state = session.advance_round()
        assert state["turn"] == 1
        assert session.primary.head == (0, 1)
        assert len(session.primary.policy.intents) == 1


class TestPass:
    def test_pass_costs_nothing(self):
        session = _session(width=5, height=5, starting_health=1)
        session.advance_round()
        session.advance_round()
        assert session.primary.health == 1
        assert session.primary.head == (2, 2)
        assert session.status == SessionStatus.RUNNING
        assert session.turn == 2


class TestLongRunInvariants:
    def test_invariants_hold(self):
        session = _session(width=8, height=8, agent_count=6, food_count=4,
                           food_score=5, food_timing=FoodTiming.ENTER, seed=3)
        session.push_intent("up")
        gone: set[str] = set()
        total = session.board.total_cells()

        for _ in range(60):
            if session.ended:
                break
            before = {s.id: (s.length, s.health) for s in session.agents}
            session.advance_round()
            gone.update(e.snake_id for e in session.eliminations)

            bodies = set()
            for snake in session.agents:
                if snake.alive:
                    assert snake.id not in gone
                assert snake.length == len(snake.body) <= total
                length, health = before[snake.id]
                if snake.length == length:
                    assert snake.health <= health
                else:
                    assert snake.length == length + 1
                bodies.update(snake.body)

            assert len(session.food) <= session.food.target
            assert not bodies & set(session.food.positions)
