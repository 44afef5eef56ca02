import os

from main import app

if __name__ == "__main__":
    port = int(os.environ.get("PORT", "8080"))
    print("🐍 Battlesnake server starting...")
    print(f"📡 Server running at: http://localhost:{port}")
    print("🎮 Use this URL in Battlesnake games!")
    app.run(host='0.0.0.0', port=port, debug=False)
