"""
Command endpoint as a Flask Blueprint.
"""

import time

from flask import Blueprint, request, jsonify

from app_config import DEFAULT_USER_ID, INTERNAL_ERROR_REPLY
from interpreter_registry import get_interpreter
from chat_logger import get_logger, sanitize_log_string

logger = get_logger("courier_chat")

ai_bp = Blueprint("ai", __name__)


@ai_bp.route("/api/ai", methods=["POST"])
def ai_reply():
    """
    Interpret one free-text order command.

    Request:
        POST /api/ai
        {
            "text": "create order 3 boxes of mangoes for Ravi",
            "userId": "driver-42"
        }

    Response:
        {
            "reply": "Order created. Tracking ID ORD-....",
            "action": "created_order",
            "order": {...}
        }
    """
    start_time = time.time()

    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        logger.warning("POST /api/ai | Invalid JSON body")
        return jsonify({
            "reply": "Invalid request. Send JSON with a 'text' field.",
            "action": "error",
        }), 400

    text = body.get("text")
    user_id = body.get("userId") or DEFAULT_USER_ID
    if not isinstance(text, str) or not text.strip():
        logger.warning(f"POST /api/ai | user={user_id} | Empty text")
        return jsonify({
            "reply": "Please say or type a command, e.g. 'create order 2 boxes of apples'.",
            "action": "error",
        }), 400

    text = text.strip()
    truncated = text[:100] + "..." if len(text) > 100 else text
    logger.info(f'POST /api/ai | user={user_id} | text="{sanitize_log_string(truncated)}"')

    try:
        response = get_interpreter().submit(text, str(user_id))
    except Exception as e:
        logger.exception(f"POST /api/ai | user={user_id} | error={str(e)}")
        return jsonify({"reply": INTERNAL_ERROR_REPLY, "error": str(e)}), 500

    logger.info(
        f"POST /api/ai | user={user_id} | action={response['action']} | "
        f"response_time_ms={round((time.time() - start_time) * 1000)}"
    )
    return jsonify(response), 200
