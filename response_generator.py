"""
Response generation module — reply text for every command outcome.
"""

from datetime import datetime
from typing import List, Optional

from models import Order

PICKUP_TIME_FORMAT = "%Y-%m-%d %I:%M %p"


def format_pickup_time(value: Optional[datetime]) -> str:
    return value.strftime(PICKUP_TIME_FORMAT) if value else "not set"


def created_message(order: Order) -> str:
    return f"Order created. Tracking ID {order.tracking_id}."


def not_found_message(tracking_id: str, apologetic: bool = False) -> str:
    prefix = "Sorry, I" if apologetic else "I"
    return f"{prefix} couldn't find order {tracking_id}."


def order_summary_message(order: Order) -> str:
    return (
        f"Here are the details for {order.tracking_id}:\n"
        f"- Customer: {order.customer_name or 'N/A'}\n"
        f"- Items: {order.item or 'N/A'}\n"
        f"- Address: {order.address or 'N/A'}\n"
        f"- Status: {order.status}"
    )


def next_pickup_message(order: Order) -> str:
    return (
        f"Next pickup: {order.item} ({order.qty}) — "
        f"{order.address or 'address not set'}. Tracking ID {order.tracking_id}."
    )


def list_orders_message(orders: List[Order]) -> str:
    if not orders:
        return "No orders found."
    return f"Showing your {len(orders)} most recent orders."


def cancel_message(order: Optional[Order], requested_id: str) -> str:
    if order:
        return f"Order {order.tracking_id} cancelled."
    return f"Couldn't find order {requested_id}."


def ask_for_order_id_message(action: str) -> str:
    """Prompt for a missing tracking id, with an example phrased for *action*."""
    examples = {
        "cancel": "Please provide the order ID to cancel (e.g., 'Cancel order ORD-ABC123').",
        "address": (
            "Please provide the order ID to update the address "
            "(e.g., 'Update address of order ORD-ABC123 Pune')."
        ),
        "update": "Please provide a valid order ID (e.g., ORD-ABC123) to update.",
        "delete": "Please provide the order ID to delete (e.g., 'delete order ORD-ABC123').",
    }
    return examples[action]


def ask_for_address_message(tracking_id: str) -> str:
    return (
        "Please provide the new address after the order ID "
        f"(e.g., 'Update address of order {tracking_id} Pune, Maharashtra')."
    )


def address_updated_message(order: Order) -> str:
    return f"The address for order {order.tracking_id} has been updated to: {order.address}"


UPDATE_CLARIFICATION = "What would you like to update? (status, pickup time, assignee, items)"


def order_updated_message(order: Order) -> str:
    return (
        f"Order {order.tracking_id} updated.\n"
        f"- Status: {order.status}\n"
        f"- Pickup time: {format_pickup_time(order.pickup_time)}\n"
        f"- Assigned to: {order.assigned_to or 'not set'}\n"
        f"- Items: {order.item or 'N/A'}"
    )


def deleted_message(tracking_id: str) -> str:
    return f"Order {tracking_id} has been deleted."


NO_PICKUPS = "You have no upcoming pickups."
