import math
from typing import Dict, List, Tuple

from board import DIRECTIONS, GameState, build_state, format_grid
from search import alphabeta, minimax
from territory import TIE_BREAK_POLICIES, voronoi


class InvalidSnapshotError(ValueError):
    """Raised when a move request cannot be turned into a board position"""


class BattlesnakeLogic:
    def __init__(self, **settings):
        # Search and board settings
        self.default_settings = {
            'board_size': 11,
            'search_depth': 2,
            'health_threshold': 2,
            'max_health': 100,
            'tie_break': 'neutral',
            'use_pruning': True,
            'verbose': True,
        }

        self.settings = self.default_settings.copy()
        self.update_settings(settings)

        # Move directions, in the order ties are broken
        self.directions = list(DIRECTIONS)

    def get_move(self, game_state: Dict) -> str:
        """Main function to determine the next move"""
        state = self.parse_game_state(game_state)
        move_scores = self.score_moves(state)
        best_move = self.pick_best(move_scores)

        if self.settings['verbose']:
            print(f"\n=== TURN {state.turn} ===")
            print(f"Head position: {state.heads[0]}  Health: {state.health}")
            print(f"Territory: {voronoi(state, self.settings['tie_break'])}")
            print(format_grid(state.board))
            print(f"Move scores: {move_scores}")
            print(f"✓ Choosing: {best_move}\n")

        return best_move

    def decide_move(self, state: GameState) -> str:
        """Best move for our snake from an already built position"""
        return self.pick_best(self.score_moves(state))

    def score_moves(self, state: GameState) -> Dict[str, int]:
        """Search score of each of our four moves, in direction order"""
        move_scores = {}
        for direction in self.directions:
            # Our snake has moved, so the opponents reply next
            move_scores[direction] = self.search(state.apply_move(0, direction))
        return move_scores

    def pick_best(self, move_scores: Dict[str, int]) -> str:
        """First direction with the strictly greatest score"""
        best_move = self.directions[0]
        for direction in self.directions[1:]:
            if move_scores[direction] > move_scores[best_move]:
                best_move = direction
        return best_move

    def search(self, state: GameState) -> int:
        """Value of a position where the opponents are about to move"""
        depth = self.settings['search_depth']
        health_threshold = self.settings['health_threshold']
        tie_break = self.settings['tie_break']

        if self.settings['use_pruning']:
            return alphabeta(state, depth, -math.inf, math.inf, False, health_threshold, tie_break)
        return minimax(state, depth, False, health_threshold, tie_break)

    def parse_game_state(self, game_state: Dict) -> GameState:
        """Build the root position from a Battlesnake move request, our snake first"""
        try:
            board = game_state['board']
            you = game_state['you']
            turn = self.parse_int(game_state.get('turn', 0), 'turn')
            if turn < 0:
                raise InvalidSnapshotError(f"turn cannot be negative, got {turn}")
            health = self.parse_int(you['health'], 'health')
            my_body = self.parse_body(you)
            bodies = [my_body]
            found_me = False
            for snake in board['snakes']:
                body = self.parse_body(snake)
                # Only our first entry is skipped; a duplicate stays an opponent
                if not found_me and self.is_same_snake(snake, you, body, my_body):
                    found_me = True
                    continue
                bodies.append(body)
            food = [self.parse_point(f) for f in board.get('food', [])]
        except InvalidSnapshotError:
            raise
        except (KeyError, TypeError, AttributeError) as e:
            raise InvalidSnapshotError(f"Malformed move request: {e!r}") from e

        size = self.settings['board_size']
        width, height = board.get('width', size), board.get('height', size)
        if width != size or height != size:
            raise InvalidSnapshotError(f"Board is {width}x{height}, expected {size}x{size}")

        try:
            return build_state(turn, bodies, health, size, food, self.settings['max_health'])
        except ValueError as e:
            raise InvalidSnapshotError(str(e)) from e

    def parse_int(self, value, name: str) -> int:
        """Accept only real integers; no rounding of floats, strings or bools"""
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSnapshotError(f"{name} must be an integer, got {value!r}")
        return value

    def parse_point(self, point: Dict) -> Tuple[int, int]:
        """An {"x": .., "y": ..} point as an (x, y) tuple"""
        return (self.parse_int(point['x'], 'x'), self.parse_int(point['y'], 'y'))

    def parse_body(self, snake: Dict) -> List[Tuple[int, int]]:
        """Body segments as (x, y) tuples, head first"""
        return [self.parse_point(segment) for segment in snake['body']]

    def is_same_snake(self, snake: Dict, you: Dict, body: List[Tuple[int, int]],
                      my_body: List[Tuple[int, int]]) -> bool:
        """Match our own entry in the snake list by id, or by body without ids"""
        if 'id' in snake and 'id' in you:
            return snake['id'] == you['id']
        return body == my_body

    def update_settings(self, new_settings: Dict):
        """Update search settings, rejecting unknown keys and values"""
        for key in new_settings:
            if key not in self.default_settings:
                raise KeyError(f"Unknown setting: {key}")
        settings = self.settings.copy()
        settings.update(new_settings)

        if settings['tie_break'] not in TIE_BREAK_POLICIES:
            raise ValueError(f"tie_break must be one of {TIE_BREAK_POLICIES}, got {settings['tie_break']!r}")
        if settings['search_depth'] < 0:
            raise ValueError("search_depth cannot be negative")
        if settings['board_size'] < 1:
            raise ValueError("board_size must be positive")

        self.settings = settings

    def get_settings(self) -> Dict:
        """Get current settings"""
        return self.settings.copy()


# Example usage and testing
if __name__ == "__main__":
    example_game_state = {
        "game": {"id": "test", "timeout": 500},
        "turn": 1,
        "board": {
            "height": 11,
            "width": 11,
            "food": [{"x": 5, "y": 5}],
            "snakes": [
                {
                    "id": "my-snake",
                    "name": "My Snake",
                    "health": 90,
                    "body": [{"x": 3, "y": 3}, {"x": 3, "y": 2}, {"x": 3, "y": 1}],
                    "head": {"x": 3, "y": 3}
                },
                {
                    "id": "their-snake",
                    "name": "Their Snake",
                    "health": 90,
                    "body": [{"x": 7, "y": 7}, {"x": 7, "y": 8}, {"x": 7, "y": 9}],
                    "head": {"x": 7, "y": 7}
                }
            ]
        },
        "you": {
            "id": "my-snake",
            "name": "My Snake",
            "health": 90,
            "body": [{"x": 3, "y": 3}, {"x": 3, "y": 2}, {"x": 3, "y": 1}],
            "head": {"x": 3, "y": 3}
        }
    }

    snake_logic = BattlesnakeLogic()

    print("=== TESTING BATTLESNAKE LOGIC ===")
    move = snake_logic.get_move(example_game_state)
    print(f"Recommended move: {move}")
