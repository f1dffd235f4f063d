"""
Data models for the Courier Chat command interpreter.
"""

from enum import Enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any


class Intent(Enum):
    # Order lifecycle
    CREATE_ORDER    = "create_order"
    TRACK_ORDER     = "track_order"
    NEXT_PICKUP     = "next_pickup"
    LIST_ORDERS     = "list_orders"
    CANCEL_ORDER    = "cancel_order"
    DELETE_ORDER    = "delete_order"
    UPDATE_ADDRESS  = "update_address"
    UPDATE_ORDER    = "update_order"

    # Free-text fallback
    GENERAL         = "general"


class Action(Enum):
    """Response shapes returned by the command interpreter."""
    CREATED_ORDER     = "created_order"
    TRACK_ORDER       = "track_order"
    ORDER_NOT_FOUND   = "order_not_found"
    NEXT_PICKUP       = "next_pickup"
    NO_PICKUPS        = "no_pickups"
    LIST_ORDERS       = "list_orders"
    CANCEL_ORDER      = "cancel_order"
    ASK_FOR_ORDER_ID  = "ask_for_order_id"
    UPDATE_ADDRESS    = "update_address"
    ASK_FOR_ADDRESS   = "ask_for_address"
    UPDATE_ORDER      = "update_order"
    DELETE_ORDER      = "delete_order"
    LLM_REPLY         = "llm_reply"
    FALLBACK          = "fallback"


@dataclass
class ClassifiedCommand:
    intent: Intent
    tracking_id: Optional[str] = None


@dataclass
class ExtractedOrderFields:
    """Structured fields pulled out of a create-order utterance."""
    item: str
    qty: int = 1
    customer_name: Optional[str] = None
    address: Optional[str] = None
    pickup_time: Optional[datetime] = None
    assigned_to: Optional[str] = None
    status: str = "created"
    tracking_id: Optional[str] = None
    amount: float = 200
    expenses: float = 50
    source: str = "fallback"                # "llm" or "fallback"


@dataclass
class Order:
    tracking_id: str
    item: str
    qty: int = 1
    status: str = "created"
    customer_name: Optional[str] = None
    address: Optional[str] = None
    pickup_time: Optional[datetime] = None
    assigned_to: Optional[str] = None
    amount: float = 200
    expenses: float = 50
    metadata: Dict[str, Any] = field(default_factory=dict)

    # ──── Owned by the order store ────
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Serialize with the camelCase field names used on the wire."""
        return {
            "id": self.id,
            "trackingId": self.tracking_id,
            "customerName": self.customer_name,
            "address": self.address,
            "item": self.item,
            "qty": self.qty,
            "status": self.status,
            "pickupTime": _iso(self.pickup_time),
            "assignedTo": self.assigned_to,
            "amount": self.amount,
            "expenses": self.expenses,
            "metadata": dict(self.metadata),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
