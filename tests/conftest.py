"""Shared builders for Battlesnake move requests."""

from __future__ import annotations

import pytest


def to_points(body):
    return [{"x": x, "y": y} for x, y in body]


@pytest.fixture
def game_request():
    """Factory for a /move request body; the first body is ours."""

    def build(bodies, health=100, turn=0, size=11, food=(), you_index=0):
        snakes = []
        for i, body in enumerate(bodies):
            snakes.append(
                {
                    "id": f"snake-{i}",
                    "name": f"Snake {i}",
                    "health": health,
                    "body": to_points(body),
                    "head": to_points(body[:1])[0],
                }
            )
        you = dict(snakes[0])
        # The server lists snakes in its own order, not ours
        if you_index:
            snakes.insert(you_index, snakes.pop(0))
        return {
            "game": {"id": "game-1", "timeout": 500},
            "turn": turn,
            "board": {
                "height": size,
                "width": size,
                "food": to_points(food),
                "snakes": snakes,
            },
            "you": you,
        }

    return build
