from flask import Flask, request, jsonify
from battlesnake import BattlesnakeLogic

# Fallback when a move request cannot be searched
DEFAULT_MOVE = "up"

SNAKE_INFO = {
    "apiversion": "1",
    "author": "",
    "color": "#e9ecef",
    "head": "rudolph",
    "tail": "mouse"
}

app = Flask(__name__)
snake_logic = BattlesnakeLogic()


def game_id(game_state) -> str:
    """Game id of a request body, if it carries one"""
    try:
        return game_state["game"]["id"]
    except (KeyError, TypeError):
        return "?"


@app.route('/')
def info():
    return jsonify(SNAKE_INFO)

@app.route('/start', methods=['POST'])
def start():
    game_state = request.get_json(silent=True)
    print(f"🐍 Game {game_id(game_state)} starting!")
    return "OK"

@app.route('/move', methods=['POST'])
def move():
    game_state = request.get_json(silent=True)
    try:
        move = snake_logic.get_move(game_state)
    except Exception as e:
        print(f"❌ Error: {e}")
        return jsonify({"move": DEFAULT_MOVE})
    print(f"🎯 Making move: {move}")
    return jsonify({"move": move})

@app.route('/end', methods=['POST'])
def end():
    game_state = request.get_json(silent=True)
    print(f"🏁 Game {game_id(game_state)} ended!")
    return "OK"

# Health check endpoint
@app.route('/health')
def health():
    return jsonify({"status": "healthy"})
