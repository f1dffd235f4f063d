"""
Courier Chat — Command API Backend
Runs on port 5000 (PORT env) with the /api/ai endpoint.

Usage:
    python server.py

Endpoints:
    POST http://localhost:5000/api/ai         Body: {"text": "...", "userId": "..."}
    GET  http://localhost:5000/api/orders
    GET  http://localhost:5000/api/orders/<trackingId>
    GET  http://localhost:5000/health
"""

from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_cors import CORS

from app_config import PORT, DEBUG
from interpreter_registry import get_interpreter
from routes.ai import ai_bp
from routes.orders import orders_bp
from chat_logger import get_logger

logger = get_logger("courier_chat")


def create_app() -> Flask:
    app = Flask(__name__)
    CORS(app)
    app.register_blueprint(ai_bp)
    app.register_blueprint(orders_bp)

    @app.route("/health", methods=["GET"])
    def health():
        """Health check endpoint."""
        interpreter = get_interpreter()
        return jsonify({
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "orders": len(interpreter.store),
            "active_contexts": len(interpreter.contexts),
            "llm_configured": interpreter.llm_client is not None,
        })

    return app


app = create_app()


if __name__ == "__main__":
    print("=" * 60)
    print("  Courier Chat — Command API Server")
    print("=" * 60)
    print()

    interpreter = get_interpreter()
    if interpreter.llm_client is None:
        print("⚠️  No LLM API key configured — using deterministic extraction and fixed fallback replies")
        print("   Set LLM_API_KEY (or GROQ_API_KEY) in .env to enable the model backend")
        print()

    print(f"🚀 Starting server on http://localhost:{PORT}")
    print(f"   POST http://localhost:{PORT}/api/ai")
    print(f"   GET  http://localhost:{PORT}/api/orders")
    print(f"   GET  http://localhost:{PORT}/health")
    print()

    app.run(
        host="0.0.0.0",
        port=PORT,
        debug=DEBUG,
    )
