"""
Adversarial lookahead for the move driver.

Plies alternate between our snake (maximising, one move) and every opponent
at once (minimising, one joint move). Only the opponents' ply closes a turn,
so ``depth`` counts plies, not turns.
"""

import itertools
import math
from typing import Iterator, Tuple

from board import DIRECTIONS, GameState
from territory import voronoi

# Losing scores sit far below any territory differential
LOSS_SCORE = -1000000000


def evaluate(state: GameState, health_threshold: int = 2, tie_break: str = 'neutral') -> int:
    """Score a leaf: a loss ranks by how late it happens, otherwise territory differential"""
    if state.is_lost(health_threshold):
        return LOSS_SCORE + state.turn
    scores = voronoi(state, tie_break)
    # Our territory minus everyone else's
    return 2 * scores[0] - sum(scores)


def opponent_moves(agent_count: int) -> Iterator[Tuple[str, ...]]:
    """Every combination of opponent directions, generated lazily"""
    return itertools.product(DIRECTIONS, repeat=agent_count - 1)


def alphabeta(state: GameState, depth: int, alpha: float, beta: float, maximising: bool,
              health_threshold: int = 2, tie_break: str = 'neutral') -> int:
    """Depth-limited minimax value of ``state`` with alpha-beta cut-offs"""
    if depth == 0:
        return evaluate(state, health_threshold, tie_break)

    if maximising:
        value = -math.inf
        for direction in DIRECTIONS:
            child = state.apply_move(0, direction)
            value = max(value, alphabeta(child, depth - 1, alpha, beta, False,
                                         health_threshold, tie_break))
            if value >= beta:
                break
            alpha = max(alpha, value)
        return value

    value = math.inf
    for joint_move in opponent_moves(state.agent_count):
        child = state.apply_joint_move(joint_move)
        value = min(value, alphabeta(child, depth - 1, alpha, beta, True,
                                     health_threshold, tie_break))
        if value <= alpha:
            break
        beta = min(beta, value)
    return value


def minimax(state: GameState, depth: int, maximising: bool,
            health_threshold: int = 2, tie_break: str = 'neutral') -> int:
    """Same tree as alphabeta, searched in full"""
    if depth == 0:
        return evaluate(state, health_threshold, tie_break)

    if maximising:
        return max(minimax(state.apply_move(0, direction), depth - 1, False,
                           health_threshold, tie_break)
                   for direction in DIRECTIONS)

    return min(minimax(state.apply_joint_move(joint_move), depth - 1, True,
                       health_threshold, tie_break)
               for joint_move in opponent_moves(state.agent_count))
