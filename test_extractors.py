"""
Tests for the deterministic extractors and the add/remove item sub-parser.
"""

from datetime import datetime

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
)


class TestTrackingId:

    def test_extracts_and_uppercases(self):
        assert extract_tracking_id("ship ord-abc123 now") == "ORD-ABC123"

    def test_idempotent(self):
        once = extract_tracking_id("ship ord-abc123 now")
        assert extract_tracking_id(once) == once

    def test_first_match_wins(self):
        assert extract_tracking_id("ORD-AAA then ORD-BBB") == "ORD-AAA"

    def test_missing(self):
        assert extract_tracking_id("update my order") is None
        assert extract_tracking_id(None) is None

    def test_cancel_id_follows_phrase(self):
        assert extract_cancel_id("please cancel order ord-x1 now") == "ORD-X1"
        assert extract_cancel_id("cancel order") is None

    def test_strip_tracking_id(self):
        assert strip_tracking_id("update ORD-12AB pickup 5pm") == "update pickup 5pm"


class TestAddressTail:

    def test_strips_to(self):
        assert text_after_tracking_id("update address of ORD-A1 to MG Road, Pune", "ORD-A1") == "MG Road, Pune"

    def test_strips_is_and_colon(self):
        assert text_after_tracking_id("address of ORD-A1 is Baner", "ORD-A1") == "Baner"
        assert text_after_tracking_id("add address ORD-A1: 12 Park St", "ORD-A1") == "12 Park St"

    def test_matches_lowercase_id_in_text(self):
        assert text_after_tracking_id("update address ord-a1 to Pune", "ORD-A1") == "Pune"

    def test_nothing_after_id(self):
        assert text_after_tracking_id("update address of ORD-A1", "ORD-A1") == ""


class TestAssigneeAndStatus:

    def test_assign_to(self):
        assert extract_assignee("update ORD-1 assign to Ravi Kumar") == "Ravi Kumar"

    def test_assign_without_to(self):
        assert extract_assignee("assign Kiran") == "Kiran"

    def test_assignee_stops_at_next_clause(self):
        assert extract_assignee("assign to Ravi status shipped") == "Ravi"

    def test_assignee_drops_trailing_conjunction(self):
        assert extract_assignee("modify ORD-Z1 assign to Kiran and add juice") == "Kiran"
        assert extract_assignee("assign to Ravi Kumar and status shipped") == "Ravi Kumar"

    def test_assignee_keeps_names_containing_and(self):
        assert extract_assignee("assign to Anderson") == "Anderson"

    def test_no_assignee(self):
        assert extract_assignee("update ORD-1 status shipped") is None

    def test_status_keywords(self):
        assert extract_status("mark it SHIPPED") == "shipped"
        assert extract_status("order is processing") == "processing"
        assert extract_status("delivered already") == "delivered"

    def test_status_check_order(self):
        assert extract_status("shipped and delivered") == "delivered"

    def test_status_whole_word_only(self):
        assert extract_status("unshipped") is None
        assert extract_status("update please") is None


class TestPickupTime:

    def test_later_today(self):
        now = datetime(2024, 5, 10, 9, 30)
        assert extract_pickup_time("5 pm", now) == datetime(2024, 5, 10, 17, 0)

    def test_already_passed_rolls_to_tomorrow(self):
        now = datetime(2024, 5, 10, 18, 0)
        assert extract_pickup_time("5 pm", now) == datetime(2024, 5, 11, 17, 0)

    def test_exactly_now_rolls_to_tomorrow(self):
        now = datetime(2024, 5, 10, 17, 0)
        assert extract_pickup_time("5 pm", now) == datetime(2024, 5, 11, 17, 0)

    def test_minutes_and_24h(self):
        now = datetime(2024, 5, 10, 8, 0)
        assert extract_pickup_time("5:30pm", now) == datetime(2024, 5, 10, 17, 30)
        assert extract_pickup_time("17:45", now) == datetime(2024, 5, 10, 17, 45)

    def test_twelve_am_is_midnight(self):
        now = datetime(2024, 5, 10, 8, 0)
        assert extract_pickup_time("12am", now) == datetime(2024, 5, 11, 0, 0)

    def test_twelve_pm_is_noon(self):
        now = datetime(2024, 5, 10, 8, 0)
        assert extract_pickup_time("12 pm", now) == datetime(2024, 5, 10, 12, 0)

    def test_invalid_time(self):
        assert extract_pickup_time("pickup at 27:00", datetime(2024, 5, 10)) is None
        assert extract_pickup_time("no time here") is None

    def test_mentions_pickup(self):
        assert mentions_pickup("set pickup 5pm")
        assert mentions_pickup("pick up at 5")
        assert not mentions_pickup("deliver at 5")


class TestItemSubParser:

    def test_segment_truncated_at_next_keyword(self):
        assert split_item_segment("add juice and status shipped", "add").strip() == "juice and"

    def test_remove_segment_stops_at_add(self):
        assert split_item_segment("remove bread add milk", "remove").strip() == "bread"

    def test_missing_keyword(self):
        assert split_item_segment("status shipped", "add") == ""

    def test_keyword_is_whole_word(self):
        assert split_item_segment("update address", "add") == ""

    def test_parse_item_list(self):
        assert parse_item_list(" juice, milk and eggs.") == ["juice", "milk", "eggs"]
        assert parse_item_list(" juice and ") == ["juice"]
        assert parse_item_list("") == []

    def test_add_items(self):
        assert add_items("bread", ["juice"]) == "bread, juice"
        assert add_items("", ["juice", "milk"]) == "juice, milk"

    def test_remove_items_middle(self):
        assert remove_items("bread, juice, milk", ["juice"]) == "bread, milk"

    def test_remove_items_edges(self):
        assert remove_items("bread, juice, milk", ["milk"]) == "bread, juice"
        assert remove_items("bread, juice, milk", ["BREAD"]) == "juice, milk"

    def test_remove_is_whole_word(self):
        assert remove_items("breadsticks, bread", ["bread"]) == "breadsticks"

    def test_remove_everything(self):
        assert remove_items("bread, juice", ["bread", "juice"]) == ""
