"""Tests for the search module: leaf evaluation, opponent enumeration, alpha-beta."""

from __future__ import annotations

import math

import pytest

import search
from board import build_state
from search import LOSS_SCORE, alphabeta, evaluate, minimax, opponent_moves

SMALL_POSITIONS = [
    [[(2, 2), (2, 1)], [(4, 4), (4, 5)]],
    [[(3, 3), (2, 3), (1, 3)], [(3, 5), (4, 5)]],
    [[(1, 1)], [(5, 5), (5, 4), (4, 4)]],
    [[(2, 4), (2, 5)], [(4, 2), (4, 1), (3, 1)]],
]


class TestOpponentMoves:
    def test_no_opponents_yields_one_empty_move(self) -> None:
        assert list(opponent_moves(1)) == [()]

    def test_one_opponent(self) -> None:
        assert list(opponent_moves(2)) == [("up",), ("down",), ("left",), ("right",)]

    def test_joint_moves_are_the_full_product(self) -> None:
        moves = list(opponent_moves(3))
        assert len(moves) == 16
        assert len(set(moves)) == 16
        assert ("left", "up") in moves

    def test_generated_lazily(self) -> None:
        moves = opponent_moves(4)
        assert iter(moves) is moves
        assert next(moves) == ("up", "up", "up")


class TestEvaluate:
    def test_loss_scores_by_turn(self) -> None:
        state = build_state(7, [[(0, 5)]], 100)
        assert evaluate(state) == LOSS_SCORE + 7

    def test_later_loss_ranks_higher(self) -> None:
        late = build_state(50, [[(0, 5)]], 100)
        early = build_state(10, [[(0, 5)]], 100)
        assert evaluate(late) > evaluate(early)

    def test_starvation_is_a_loss(self) -> None:
        state = build_state(3, [[(5, 5)]], 2)
        assert evaluate(state) == LOSS_SCORE + 3
        assert evaluate(state, health_threshold=0) > LOSS_SCORE

    def test_lone_snake_scores_its_territory(self) -> None:
        state = build_state(0, [[(5, 5)]], 100)
        assert evaluate(state) == 120

    def test_territory_differential(self) -> None:
        state = build_state(0, [[(4, 5)], [(6, 5)]], 100)
        assert evaluate(state) == 0
        assert evaluate(state, tie_break="first") == 65 - 54


class TestAlphaBeta:
    @pytest.mark.parametrize("bodies", SMALL_POSITIONS)
    @pytest.mark.parametrize("depth", [1, 2, 3])
    @pytest.mark.parametrize("maximising", [True, False])
    def test_matches_plain_minimax(self, bodies, depth, maximising) -> None:
        state = build_state(0, bodies, 100, size=7)
        pruned = alphabeta(state, depth, -math.inf, math.inf, maximising)
        assert pruned == minimax(state, depth, maximising)

    def test_matches_plain_minimax_with_three_snakes(self) -> None:
        state = build_state(0, [[(3, 3)], [(1, 1), (1, 2)], [(5, 5), (5, 4)]], 100, size=7)
        for maximising in (True, False):
            pruned = alphabeta(state, 2, -math.inf, math.inf, maximising)
            assert pruned == minimax(state, 2, maximising)

    def test_matches_plain_minimax_with_first_tie_break(self) -> None:
        state = build_state(0, SMALL_POSITIONS[0], 100, size=7)
        pruned = alphabeta(state, 3, -math.inf, math.inf, True, tie_break="first")
        assert pruned == minimax(state, 3, True, tie_break="first")

    def test_depth_zero_is_the_leaf_value(self) -> None:
        state = build_state(0, SMALL_POSITIONS[1], 100, size=7)
        assert alphabeta(state, 0, -math.inf, math.inf, True) == evaluate(state)

    def test_pruning_skips_leaves(self, monkeypatch) -> None:
        calls = []
        real_evaluate = search.evaluate

        def counting_evaluate(*args):
            calls.append(1)
            return real_evaluate(*args)

        monkeypatch.setattr(search, "evaluate", counting_evaluate)
        state = build_state(0, SMALL_POSITIONS[0], 100, size=7)
        alphabeta(state, 3, -math.inf, math.inf, True)
        pruned_calls = len(calls)
        calls.clear()
        minimax(state, 3, True)
        assert pruned_calls <= len(calls) == 4 * 4 * 4

    def test_losses_keep_their_turn(self) -> None:
        # Already on the wall ring: every line loses after one closed turn
        state = build_state(7, [[(0, 2)]], 100, size=5)
        assert alphabeta(state, 2, -math.inf, math.inf, True) == LOSS_SCORE + 8

    def test_matches_plain_minimax_in_crowded_corner(self) -> None:
        state = build_state(0, [[(1, 2)], [(2, 3)], [(2, 1)]], 100, size=5)
        for depth in (1, 2, 3):
            value = alphabeta(state, depth, -math.inf, math.inf, False)
            assert value == minimax(state, depth, False)
