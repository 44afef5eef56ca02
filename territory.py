from typing import List

from board import GameState, Grid

UNOWNED = -1
CONTESTED = -2

# 'neutral': a cell reached by two snakes in the same round belongs to nobody
# 'first': the first owner found in scan order takes it
TIE_BREAK_POLICIES = ('neutral', 'first')


def voronoi(state: GameState, tie_break: str = 'neutral') -> List[int]:
    """Count, for every snake, the free cells it reaches before any other snake.

    All heads flood outward together one ring per round. A cell joins the
    territory of the snake that reaches it first; cells still occupied at
    ``state.turn`` are never claimed and never expanded through.
    """
    if tie_break not in TIE_BREAK_POLICIES:
        raise ValueError(f"unknown tie-break policy {tie_break!r}, expected one of {TIE_BREAK_POLICIES}")

    size = state.size
    board = state.board
    turn = state.turn
    scores = [0] * state.agent_count

    owners = Grid(size, UNOWNED)
    for i, head in enumerate(state.heads):
        owners.set_coord(head, i)

    changed = True
    while changed:
        changed = False
        # Owners are read from the previous round only, so every head advances one step per round
        claimed = owners.copy()
        for x in range(size):
            for y in range(size):
                if owners.get(x, y) != UNOWNED or board.get(x, y) > turn:
                    continue

                reached_by = []
                for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
                    owner = owners.get(nx, ny)
                    if owner >= 0 and owner not in reached_by:
                        reached_by.append(owner)
                if not reached_by:
                    continue

                if len(reached_by) == 1 or tie_break == 'first':
                    claimed.set(x, y, reached_by[0])
                    scores[reached_by[0]] += 1
                else:
                    claimed.set(x, y, CONTESTED)
                changed = True
        owners = claimed

    return scores
