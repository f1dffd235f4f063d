"""
Order Handler — applies a classified command to the order store.
==================================================================

Supported intents:
  - CREATE_ORDER:     "create order 2 boxes of apples for Ravi"
  - TRACK_ORDER:      "track order ORD-ABC123", "where is order ORD-ABC123"
  - NEXT_PICKUP:      "what's my next pickup?"
  - LIST_ORDERS:      "show my orders", "recent orders"
  - CANCEL_ORDER:     "cancel order ORD-ABC123"
  - DELETE_ORDER:     "delete order ORD-ABC123"
  - UPDATE_ADDRESS:   "update address of ORD-ABC123 to MG Road, Pune"
  - UPDATE_ORDER:     "update ORD-ABC123 add juice and status shipped"

Every handler returns a response dict {"reply", "action", ...}. Missing
tracking ids and addresses come back as clarification actions; unknown
tracking ids come back as not-found actions. Neither writes anything.
Status values are not validated against a transition graph.
"""

from datetime import datetime
from typing import Callable, Dict, List, Optional

import response_generator as messages
from models import Intent, Action, ClassifiedCommand, Order
from order_store import OrderStore, make_tracking_id, ASCENDING, DESCENDING
from order_extractor import extract_order_fields
from extractors import (
    extract_tracking_id,
    extract_cancel_id,
    extract_assignee,
    extract_status,
    extract_pickup_time,
    mentions_pickup,
    strip_tracking_id,
    text_after_tracking_id,
    split_item_segment,
    parse_item_list,
    add_items,
    remove_items,
    PICKUP_KEYWORD_RE,
)
from chat_logger import get_logger
from app_config import DEFAULT_STATUS, PICKUP_PENDING_STATUSES, RECENT_ORDERS_LIMIT, ORDER_CREATED_VIA

logger = get_logger("courier_chat")


def build_response(action: Action, reply: str, **extra) -> Dict:
    """Response dict with orders serialized for the wire."""
    response = {"reply": reply, "action": action.value}
    for key, value in extra.items():
        if isinstance(value, Order):
            value = value.to_dict()
        elif isinstance(value, list):
            value = [v.to_dict() if isinstance(v, Order) else v for v in value]
        response[key] = value
    return response


def detect_order_updates(text: str, order: Order, now: Optional[datetime] = None) -> Dict:
    """
    Every field change an update command asks for, in one dict.

    Looks for a status keyword, a pickup time (only when "pickup" is
    mentioned), an assignee, and items to add and/or remove. Removals
    apply after additions.
    """
    updates = {}
    clean = strip_tracking_id(text)

    new_status = extract_status(clean)
    if new_status:
        updates["status"] = new_status

    if mentions_pickup(clean):
        keyword = PICKUP_KEYWORD_RE.search(clean)
        pickup_time = extract_pickup_time(clean[keyword.end():], now) or extract_pickup_time(clean, now)
        if pickup_time:
            updates["pickup_time"] = pickup_time

    assignee = extract_assignee(clean)
    if assignee:
        updates["assigned_to"] = assignee

    item = order.item
    added = parse_item_list(split_item_segment(clean, "add"))
    if added:
        item = add_items(item, added)
        updates["item"] = item

    removed = parse_item_list(split_item_segment(clean, "remove"))
    if removed and item:
        updates["item"] = remove_items(item, removed)

    return updates


class OrderHandler:
    """Intent-keyed transition engine over an OrderStore."""

    def __init__(
        self,
        store: OrderStore,
        llm_client=None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.llm_client = llm_client
        self._now = now
        self._handlers = {
            Intent.CREATE_ORDER: self.create_order,
            Intent.TRACK_ORDER: self.track_order,
            Intent.NEXT_PICKUP: self.next_pickup,
            Intent.LIST_ORDERS: self.list_orders,
            Intent.CANCEL_ORDER: self.cancel_order,
            Intent.DELETE_ORDER: self.delete_order,
            Intent.UPDATE_ADDRESS: self.update_address,
            Intent.UPDATE_ORDER: self.update_order,
        }

    def handles(self, intent: Intent) -> bool:
        return intent in self._handlers

    def handle(self, command: ClassifiedCommand, text: str, user_id: str) -> Dict:
        handler = self._handlers.get(command.intent)
        if handler is None:
            raise ValueError(f"No order handler for intent: {command.intent.value}")
        return handler(command, text, user_id)

    # ─────────────────────────────────────────────
    # CREATE / READ
    # ─────────────────────────────────────────────

    def create_order(self, command: ClassifiedCommand, text: str, user_id: str) -> Dict:
        fields = extract_order_fields(text, self.llm_client)
        order = self.store.create(Order(
            tracking_id=make_tracking_id(),
            customer_name=fields.customer_name,
            address=fields.address,
            item=fields.item,
            qty=fields.qty,
            status=DEFAULT_STATUS,
            pickup_time=fields.pickup_time,
            assigned_to=fields.assigned_to,
            amount=fields.amount,
            expenses=fields.expenses,
            metadata={"createdBy": user_id, "createdVia": ORDER_CREATED_VIA},
        ))
        logger.info(
            f"Order created | tracking_id={order.tracking_id} | user={user_id} | "
            f"qty={order.qty} | extraction={fields.source}"
        )
        return build_response(Action.CREATED_ORDER, messages.created_message(order), order=order)

    def track_order(self, command: ClassifiedCommand, text: str, user_id: str) -> Dict:
        # the track rule only matches when it captures an id
        tracking_id = command.tracking_id
        order = self.store.find_by_tracking_id(tracking_id)
        if order is None:
            return build_response(
                Action.ORDER_NOT_FOUND, messages.not_found_message(tracking_id), trackingId=tracking_id
            )
        return build_response(Action.TRACK_ORDER, messages.order_summary_message(order), order=order)

    def next_pickup(self, command: ClassifiedCommand, text: str, user_id: str) -> Dict:
        found = self.store.find(
            {"status": PICKUP_PENDING_STATUSES},
            sort=[("pickup_time", ASCENDING), ("created_at", ASCENDING)],
            limit=1,
        )
        if not found:
            return build_response(Action.NO_PICKUPS, messages.NO_PICKUPS)
        return build_response(Action.NEXT_PICKUP, messages.next_pickup_message(found[0]), order=found[0])

    def list_orders(self, command: ClassifiedCommand, text: str, user_id: str) -> Dict:
        orders = self.recent_orders()
        return build_response(Action.LIST_ORDERS, messages.list_orders_message(orders), orders=orders)

    def recent_orders(self, limit: int = RECENT_ORDERS_LIMIT) -> List[Order]:
        return self.store.find(sort=[("created_at", DESCENDING)], limit=limit)

    # ─────────────────────────────────────────────
    # MUTATIONS
    # ─────────────────────────────────────────────

    def cancel_order(self, command: ClassifiedCommand, text: str, user_id: str) -> Dict:
        requested = extract_cancel_id(text)
        if not requested:
            return build_response(Action.ASK_FOR_ORDER_ID, messages.ask_for_order_id_message("cancel"))

        order = self.store.update_one({"tracking_id": requested}, {"status": "cancelled"})
        if order:
            logger.info(f"Order cancelled | tracking_id={order.tracking_id} | user={user_id}")
        return build_response(Action.CANCEL_ORDER, messages.cancel_message(order, requested), order=order)

    def update_address(self, command: ClassifiedCommand, text: str, user_id: str) -> Dict:
        tracking_id = extract_tracking_id(text)
        if not tracking_id:
            return build_response(Action.ASK_FOR_ORDER_ID, messages.ask_for_order_id_message("address"))

        address = text_after_tracking_id(text, tracking_id)
        if not address:
            return build_response(
                Action.ASK_FOR_ADDRESS, messages.ask_for_address_message(tracking_id), trackingId=tracking_id
            )

        order = self.store.update_one({"tracking_id": tracking_id}, {"address": address})
        if order is None:
            return build_response(
                Action.ORDER_NOT_FOUND,
                messages.not_found_message(tracking_id, apologetic=True),
                trackingId=tracking_id,
            )
        logger.info(f"Order address updated | tracking_id={tracking_id} | user={user_id}")
        return build_response(Action.UPDATE_ADDRESS, messages.address_updated_message(order), order=order)

    def update_order(self, command: ClassifiedCommand, text: str, user_id: str) -> Dict:
        tracking_id = extract_tracking_id(text)
        if not tracking_id:
            return build_response(Action.ASK_FOR_ORDER_ID, messages.ask_for_order_id_message("update"))

        order = self.store.find_by_tracking_id(tracking_id)
        if order is None:
            return build_response(
                Action.ORDER_NOT_FOUND,
                messages.not_found_message(tracking_id, apologetic=True),
                trackingId=tracking_id,
            )

        updates = detect_order_updates(text, order, self._now())
        if not updates:
            return build_response(Action.UPDATE_ORDER, messages.UPDATE_CLARIFICATION, order=order)

        updated = self.store.update_by_id(order.id, updates)
        if updated is None:
            # deleted between the lookup and the write
            return build_response(
                Action.ORDER_NOT_FOUND,
                messages.not_found_message(tracking_id, apologetic=True),
                trackingId=tracking_id,
            )
        logger.info(
            f"Order updated | tracking_id={tracking_id} | user={user_id} | fields={sorted(updates)}"
        )
        return build_response(Action.UPDATE_ORDER, messages.order_updated_message(updated), order=updated)

    def delete_order(self, command: ClassifiedCommand, text: str, user_id: str) -> Dict:
        tracking_id = extract_tracking_id(text)
        if not tracking_id:
            return build_response(Action.ASK_FOR_ORDER_ID, messages.ask_for_order_id_message("delete"))

        order = self.store.find_by_tracking_id(tracking_id)
        if order is None:
            return build_response(
                Action.ORDER_NOT_FOUND, messages.not_found_message(tracking_id), trackingId=tracking_id
            )

        self.store.delete_by_id(order.id)
        logger.info(f"Order deleted | tracking_id={tracking_id} | user={user_id}")
        return build_response(
            Action.DELETE_ORDER, messages.deleted_message(tracking_id), order={"trackingId": tracking_id}
        )
