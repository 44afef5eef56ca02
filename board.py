from typing import Iterable, List, Optional, Sequence, Tuple

Coord = Tuple[int, int]

# Stamp for the halo ring: the cell never vacates
WALL = 2 ** 31 - 1

DIRECTIONS = ['up', 'down', 'left', 'right']
DIRECTION_VECTORS = {
    'up': (0, 1),
    'down': (0, -1),
    'left': (-1, 0),
    'right': (1, 0)
}


class Grid:
    """Square board of side ``size`` padded with a one-cell halo on every side.

    Cells are addressed with board coordinates; (-1, y), (size, y), (x, -1)
    and (x, size) are the halo. Values live in one flat list so a copy is a
    single slice.
    """

    __slots__ = ('size', 'stride', 'cells')

    def __init__(self, size: int, default: int = 0, cells: Optional[List[int]] = None):
        self.size = size
        self.stride = size + 2
        if cells is None:
            cells = [default] * (self.stride * self.stride)
        self.cells = cells

    def get(self, x: int, y: int) -> int:
        return self.cells[(y + 1) * self.stride + (x + 1)]

    def get_coord(self, coord: Coord) -> int:
        return self.cells[(coord[1] + 1) * self.stride + (coord[0] + 1)]

    def set(self, x: int, y: int, value: int):
        self.cells[(y + 1) * self.stride + (x + 1)] = value

    def set_coord(self, coord: Coord, value: int):
        self.cells[(coord[1] + 1) * self.stride + (coord[0] + 1)] = value

    def copy(self) -> 'Grid':
        return Grid(self.size, cells=self.cells[:])

    def fill_walls(self, value: int = WALL):
        """Stamp every halo cell with ``value``"""
        for i in range(-1, self.size + 1):
            self.set(i, -1, value)
            self.set(i, self.size, value)
            self.set(-1, i, value)
            self.set(self.size, i, value)

    def in_bounds(self, coord: Coord) -> bool:
        """True if the coordinate is inside the playable interior"""
        x, y = coord
        return 0 <= x < self.size and 0 <= y < self.size

    def __eq__(self, other) -> bool:
        return isinstance(other, Grid) and self.size == other.size and self.cells == other.cells

    def __repr__(self) -> str:
        return f"Grid(size={self.size})"


def format_grid(grid: Grid) -> str:
    """Render a grid (halo included) row by row, walls shown as -1"""
    rows = []
    for y in range(grid.size, -2, -1):
        row = []
        for x in range(-1, grid.size + 1):
            value = grid.get(x, y)
            row.append(f"{-1 if value == WALL else value:3}")
        rows.append(''.join(row))
    return '\n'.join(rows)


def next_position(coord: Coord, direction: str) -> Coord:
    """Calculate the cell one step away in the given direction"""
    dx, dy = DIRECTION_VECTORS[direction]
    return (coord[0] + dx, coord[1] + dy)


class GameState:
    """Position at a given turn.

    ``board`` holds, for every cell, the turn at which it becomes free again;
    a cell is occupied while its stamp is greater than ``turn``. Index 0 of
    ``heads`` and ``lengths`` is our snake, and ``health`` is only tracked for
    it. A state is never modified once built: transitions return new states.
    """

    __slots__ = ('turn', 'board', 'heads', 'lengths', 'health', 'food', 'max_health')

    def __init__(self, turn: int, board: Grid, heads: Sequence[Coord], lengths: Sequence[int],
                 health: int, food: Iterable[Coord] = (), max_health: int = 100):
        self.turn = turn
        self.board = board
        self.heads = tuple(heads)
        self.lengths = tuple(lengths)
        self.health = health
        self.food = frozenset(food)
        self.max_health = max_health

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def agent_count(self) -> int:
        return len(self.heads)

    def _replace(self, **changes) -> 'GameState':
        fields = {name: getattr(self, name) for name in self.__slots__}
        fields.update(changes)
        return GameState(**fields)

    def collides_with_wall(self, index: int) -> bool:
        """True iff the head sits on the outermost interior ring or beyond"""
        x, y = self.heads[index]
        limit = self.size - 1
        return x <= 0 or x >= limit or y <= 0 or y >= limit

    def collides_with_body(self, index: int) -> bool:
        """True iff the head sits on a cell some body still occupies (walls included)"""
        if self.collides_with_wall(index):
            return True
        return self.board.get_coord(self.heads[index]) > self.turn

    def is_lost(self, health_threshold: int = 2) -> bool:
        """Terminal-loss test for our snake"""
        return (self.collides_with_wall(0)
                or self.collides_with_body(0)
                or self.health <= health_threshold)

    def apply_move(self, index: int, direction: str) -> 'GameState':
        """Move one snake's head one cell; turn and health stay put.

        Moving into a wall or a body is allowed here and scored later. A snake
        that has already collided stays where it is.
        """
        if self.collides_with_body(index):
            return self

        head = self.heads[index]
        board = self.board.copy()
        # The cell we leave becomes the link next to the head
        board.set_coord(head, self.lengths[index] + self.turn)

        heads = list(self.heads)
        heads[index] = next_position(head, direction)
        return self._replace(board=board, heads=heads)

    def apply_joint_move(self, directions: Sequence[str]) -> 'GameState':
        """Move every opponent (directions[k] belongs to snake k + 1) and close the turn"""
        state = self
        for offset, direction in enumerate(directions):
            state = state.apply_move(offset + 1, direction)
        state = state._replace(turn=state.turn + 1, health=state.health - 1)
        return state._feed()

    def _feed(self) -> 'GameState':
        """Grow every snake whose head reached food; our snake also regains full health"""
        if not self.food:
            return self

        eaten = set()
        lengths = list(self.lengths)
        health = self.health
        for index, head in enumerate(self.heads):
            if head in self.food:
                eaten.add(head)
                lengths[index] += 1
                if index == 0:
                    health = self.max_health

        if not eaten:
            return self
        return self._replace(lengths=lengths, health=health, food=self.food - eaten)

    def __repr__(self) -> str:
        return (f"GameState(turn={self.turn}, heads={list(self.heads)}, "
                f"lengths={list(self.lengths)}, health={self.health})")


def build_state(turn: int, bodies: Sequence[Sequence[Coord]], health: int, size: int = 11,
                food: Iterable[Coord] = (), max_health: int = 100) -> GameState:
    """Build the root state from every snake's body (head first), ours at index 0"""
    if not bodies:
        raise ValueError("at least one snake is required")

    board = Grid(size, 0)
    heads = []
    lengths = []
    for s, body in enumerate(bodies):
        if not body:
            raise ValueError(f"snake {s} has an empty body")
        for i, segment in enumerate(body):
            segment = tuple(segment)
            if not board.in_bounds(segment):
                raise ValueError(f"snake {s} segment {i} at {segment} is outside the {size}x{size} board")
            # Stacked segments keep the cell occupied for the longer time
            stamp = turn + len(body) - i
            if stamp > board.get_coord(segment):
                board.set_coord(segment, stamp)
        heads.append(tuple(body[0]))
        lengths.append(len(body))

    # Heads move away this turn, so their current cells count as free
    for head in heads:
        board.set_coord(head, turn)

    food = [tuple(f) for f in food]
    for f in food:
        if not board.in_bounds(f):
            raise ValueError(f"food at {f} is outside the {size}x{size} board")

    board.fill_walls(WALL)
    return GameState(turn, board, heads, lengths, health, food, max_health)
