"""
Tests for policies.py - scripted drivers.
"""

import os
import random
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from game_logic import Direction, GridSnakeEngine, SnakeConfig
from policies import GreedyPolicy, RandomPolicy, is_unsafe, make_policy


@pytest.fixture
def engine():
    return GridSnakeEngine(SnakeConfig(rows=11, columns=11, seed=11))


class TestIsUnsafe:
    def test_body_ahead_is_unsafe(self, engine):
        engine.load_snake([(2, 2), (3, 2), (3, 3), (2, 3), (1, 3)], Direction.UP)
        assert is_unsafe(engine, Direction.RIGHT) is True
        assert is_unsafe(engine, Direction.LEFT) is False

    def test_tail_is_safe(self, engine):
        engine.load_snake([(2, 2), (3, 2), (3, 3), (2, 3)], Direction.UP)
        assert is_unsafe(engine, Direction.RIGHT) is False

    def test_wall_is_unsafe_for_long_snake(self, engine):
        engine.load_snake([(0, 5), (1, 5)], Direction.UP)
        assert is_unsafe(engine, Direction.UP) is True

    def test_wall_is_safe_for_single_segment(self, engine):
        engine.load_snake([(0, 5)], Direction.UP)
        assert is_unsafe(engine, Direction.UP) is False


class TestGreedyPolicy:
    def test_heads_toward_apple(self, engine):
        engine.place_apple((5, 9))
        assert GreedyPolicy(random.Random(0)).choose(engine) is Direction.RIGHT
        engine.place_apple((0, 5))
        assert GreedyPolicy(random.Random(0)).choose(engine) is Direction.UP

    def test_avoids_body(self, engine):
        engine.load_snake([(2, 2), (3, 2), (3, 3), (2, 3), (1, 3)], Direction.UP)
        engine.place_apple((2, 8))
        assert GreedyPolicy(random.Random(0)).choose(engine) is not Direction.RIGHT

    def test_eats_apples(self, engine):
        policy = GreedyPolicy(random.Random(1))
        for _ in range(200):
            if engine.is_game_over():
                break
            engine.move(policy.choose(engine))
        assert engine.get_score() > 0


class TestRandomPolicy:
    def test_returns_direction(self, engine):
        policy = RandomPolicy(random.Random(2))
        assert all(policy.choose(engine) in Direction for _ in range(20))


class TestMakePolicy:
    def test_known_names(self):
        assert isinstance(make_policy("random", 1), RandomPolicy)
        assert isinstance(make_policy("greedy", 1), GreedyPolicy)

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            make_policy("psychic")
