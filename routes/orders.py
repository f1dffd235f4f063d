"""
Read-only order endpoints as a Flask Blueprint.
"""

from flask import Blueprint, request, jsonify

from app_config import RECENT_ORDERS_LIMIT, MAX_ORDERS_PAGE
from interpreter_registry import get_interpreter

orders_bp = Blueprint("orders", __name__)


@orders_bp.route("/api/orders", methods=["GET"])
def list_orders():
    """Most recently created orders, newest first. ?limit=N (1..50)."""
    try:
        limit = int(request.args.get("limit", RECENT_ORDERS_LIMIT))
    except ValueError:
        return jsonify({"error": "limit must be an integer"}), 400
    limit = max(1, min(limit, MAX_ORDERS_PAGE))

    orders = get_interpreter().orders.recent_orders(limit)
    return jsonify({"orders": [o.to_dict() for o in orders], "count": len(orders)})


@orders_bp.route("/api/orders/<tracking_id>", methods=["GET"])
def get_order(tracking_id):
    order = get_interpreter().store.find_by_tracking_id(tracking_id.upper())
    if order is None:
        return jsonify({"error": f"Order {tracking_id} not found"}), 404
    return jsonify({"order": order.to_dict()})
