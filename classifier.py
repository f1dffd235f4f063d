"""
Intent Classifier for delivery order commands.

Rules are evaluated top to bottom against the lower-cased utterance and
the first match wins. More specific phrases sit above the generic
"update/modify/change" rule, so "update address of ORD-1" lands on
UPDATE_ADDRESS and not UPDATE_ORDER.
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple
from models import Intent, ClassifiedCommand


@dataclass(frozen=True)
class IntentRule:
    intent: Intent
    pattern: Pattern


def _rule(intent: Intent, pattern: str) -> IntentRule:
    return IntentRule(intent, re.compile(pattern, re.IGNORECASE))


# ─────────────────────────────────────────────
# RULE TABLE (priority order)
# ─────────────────────────────────────────────

INTENT_RULES: Tuple[IntentRule, ...] = (
    _rule(
        Intent.CREATE_ORDER,
        r"\b(create\s+(an\s+)?order|place\s+(an\s+)?order|new\s+order|add\s+order|i\s+want\s+to\s+order)\b",
    ),
    _rule(
        Intent.TRACK_ORDER,
        r"\btrack\s+(?:my\s+)?(?:order\s+)?(?!(?:my|order)\b)(?P<tracking_id>[a-z0-9\-]+)"
        r"|\bwhere\s+is\s+order\s+(?P<where_id>[a-z0-9\-]+)",
    ),
    _rule(
        Intent.NEXT_PICKUP,
        r"\bnext\s+(pickup|pick\s+up|delivery|order)\b",
    ),
    _rule(
        Intent.LIST_ORDERS,
        r"\b(list|show)\s+(my\s+)?orders\b|\brecent\s+orders\b",
    ),
    _rule(Intent.CANCEL_ORDER, r"\bcancel\s+order\b"),
    _rule(Intent.DELETE_ORDER, r"\b(delete|remove)\s+order\b"),
    _rule(Intent.UPDATE_ADDRESS, r"\b(add|update)\s+address\b"),
    _rule(Intent.UPDATE_ORDER, r"\b(update|modify|change)\b"),
)


def classify(utterance: str) -> ClassifiedCommand:
    """Classify user utterance into an intent (+ tracking id when the rule captures one)."""
    text = (utterance or "").lower().strip()

    for rule in INTENT_RULES:
        match = rule.pattern.search(text)
        if not match:
            continue
        tracking_id = _captured_tracking_id(match)
        return ClassifiedCommand(intent=rule.intent, tracking_id=tracking_id)

    return ClassifiedCommand(intent=Intent.GENERAL)


def _captured_tracking_id(match) -> Optional[str]:
    groups = match.groupdict()
    for name in ("tracking_id", "where_id"):
        value = groups.get(name)
        if value:
            return value.upper()
    return None
