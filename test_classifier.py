"""
Tests for the ordered intent rule table.
"""

import pytest
from classifier import classify, INTENT_RULES
from models import Intent
from training.evaluate import evaluate


class TestIntentRules:

    @pytest.mark.parametrize("text", [
        "create order 2 boxes of apples",
        "Create an order for Ravi",
        "place order for 10 bags",
        "New order: one sofa",
        "add order for a fridge",
        "I want to order three chairs",
    ])
    def test_create_phrases(self, text):
        assert classify(text).intent == Intent.CREATE_ORDER

    def test_track_captures_and_uppercases_id(self):
        result = classify("track order ord-abc123")
        assert result.intent == Intent.TRACK_ORDER
        assert result.tracking_id == "ORD-ABC123"

    def test_where_is_order_captures_id(self):
        result = classify("Where is order ORD-XYZ9")
        assert result.intent == Intent.TRACK_ORDER
        assert result.tracking_id == "ORD-XYZ9"

    def test_track_without_id_is_not_track(self):
        assert classify("track order").intent != Intent.TRACK_ORDER

    @pytest.mark.parametrize("text", ["what's my next pickup", "next delivery?", "my next order"])
    def test_next_pickup(self, text):
        assert classify(text).intent == Intent.NEXT_PICKUP

    @pytest.mark.parametrize("text", ["list orders", "show my orders", "recent orders please"])
    def test_list_orders(self, text):
        assert classify(text).intent == Intent.LIST_ORDERS

    def test_cancel_and_delete(self):
        assert classify("cancel order ORD-1").intent == Intent.CANCEL_ORDER
        assert classify("delete order ORD-1").intent == Intent.DELETE_ORDER
        assert classify("remove order ORD-1").intent == Intent.DELETE_ORDER

    def test_unmatched_text_is_general(self):
        result = classify("how is the weather?")
        assert result.intent == Intent.GENERAL
        assert result.tracking_id is None

    def test_empty_text_is_general(self):
        assert classify("").intent == Intent.GENERAL


class TestRulePriority:
    """Earlier rules win over the generic update catch-all."""

    def test_update_address_beats_update_order(self):
        assert classify("update address of ORD-1 to Pune").intent == Intent.UPDATE_ADDRESS

    def test_update_keyword_alone_is_update_order(self):
        assert classify("update ORD-1 status shipped").intent == Intent.UPDATE_ORDER
        assert classify("change ORD-1 pickup to 5pm").intent == Intent.UPDATE_ORDER
        assert classify("modify ORD-1 assign to Kiran").intent == Intent.UPDATE_ORDER

    def test_create_beats_update(self):
        assert classify("update: create order for 3 lamps").intent == Intent.CREATE_ORDER

    def test_remove_order_is_delete_not_update_items(self):
        assert classify("please remove order ORD-1 and update").intent == Intent.DELETE_ORDER

    def test_rule_table_order(self):
        assert [r.intent for r in INTENT_RULES] == [
            Intent.CREATE_ORDER,
            Intent.TRACK_ORDER,
            Intent.NEXT_PICKUP,
            Intent.LIST_ORDERS,
            Intent.CANCEL_ORDER,
            Intent.DELETE_ORDER,
            Intent.UPDATE_ADDRESS,
            Intent.UPDATE_ORDER,
        ]


def test_labeled_utterances_all_classify_correctly():
    assert evaluate() == []
