"""
Order Field Extraction — two tiers.

1. LLM tier: one structured-output chat call that should return a single
   JSON object with the order fields.
2. Deterministic tier: item = raw text, qty 1, amount 200, expenses 50.

Any failure in tier 1 (no backend, API error, no JSON, bad JSON) drops to
tier 2. The caller only ever sees filled-in fields; the reason for the
drop is logged so silent degradation stays visible.
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional
from models import ExtractedOrderFields
from chat_logger import get_logger, sanitize_log_string
from app_config import (
    DEFAULT_QTY,
    DEFAULT_AMOUNT,
    DEFAULT_EXPENSES,
    DEFAULT_STATUS,
    LLM_EXTRACTION_TEMPERATURE,
)

logger = get_logger("courier_chat")

EXTRACTION_KEYS = (
    "customerName",
    "address",
    "item",
    "qty",
    "pickupTime",
    "assignedTo",
    "status",
    "trackingId",
    "amount",
    "expenses",
)

EXTRACTION_SYSTEM_PROMPT = """You are an extractor. Output ONLY JSON.
Focus on extracting the "assignedTo" field from the user message.
The JSON must have exactly these keys:
{
  "customerName": string | null,
  "address": string | null,
  "item": string | null,
  "qty": number,
  "pickupTime": string | null,
  "assignedTo": string | null,
  "status": string,
  "trackingId": string | null,
  "amount": number,
  "expenses": number
}
If a value is unknown, set it to null (except qty/amount/expenses, which default to 1/200/50).
pickupTime must be an ISO-8601 timestamp when present.
Do NOT add explanations or text outside JSON."""


class ExtractionError(ValueError):
    """The model reply did not contain a usable JSON object."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


def fallback_fields(text: str) -> ExtractedOrderFields:
    """Deterministic defaults used whenever the LLM tier is unavailable or fails."""
    return ExtractedOrderFields(
        item=text,
        qty=DEFAULT_QTY,
        amount=DEFAULT_AMOUNT,
        expenses=DEFAULT_EXPENSES,
        status=DEFAULT_STATUS,
        source="fallback",
    )


def build_extraction_messages(text: str) -> list:
    return [
        {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
        {"role": "user", "content": f'Extract order details from this user message: """{text}"""'},
    ]


def find_json_object(content: str) -> Dict[str, Any]:
    """
    Decode the first top-level {...} block in the reply, ignoring any
    commentary before or after it.

    Raises:
        ExtractionError: no object found, or it does not decode to a dict
    """
    start = (content or "").find("{")
    if start == -1:
        raise ExtractionError("no_json", "LLM reply contains no JSON object")
    try:
        parsed, _ = json.JSONDecoder().raw_decode(content[start:])
    except json.JSONDecodeError as e:
        raise ExtractionError("invalid_json", f"LLM reply JSON did not parse: {e}") from e
    if not isinstance(parsed, dict):
        raise ExtractionError("invalid_json", "LLM reply JSON is not an object")
    return parsed


def _text_or_none(value) -> Optional[str]:
    if value is None or value == "":
        return None
    text = str(value).strip()
    return text or None


def _positive_int(value, default: int) -> int:
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number >= 1 else default


def _number(value, default: float) -> float:
    if not value:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_timestamp(value) -> Optional[datetime]:
    """ISO-8601 → naive local datetime (pickup times are wall-clock times)."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Extraction: ignoring unparsable pickupTime | value=\"{sanitize_log_string(str(value))}\"")
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def coerce_fields(parsed: Dict[str, Any], text: str) -> ExtractedOrderFields:
    """Map the model's JSON onto ExtractedOrderFields, defaulting anything falsy."""
    return ExtractedOrderFields(
        customer_name=_text_or_none(parsed.get("customerName")),
        address=_text_or_none(parsed.get("address")),
        item=_text_or_none(parsed.get("item")) or text,
        qty=_positive_int(parsed.get("qty"), DEFAULT_QTY),
        pickup_time=_parse_timestamp(parsed.get("pickupTime")),
        assigned_to=_text_or_none(parsed.get("assignedTo")),
        status=_text_or_none(parsed.get("status")) or DEFAULT_STATUS,
        tracking_id=_text_or_none(parsed.get("trackingId")),
        amount=_number(parsed.get("amount"), DEFAULT_AMOUNT),
        expenses=_number(parsed.get("expenses"), DEFAULT_EXPENSES),
        source="llm",
    )


def extract_order_fields(text: str, llm_client=None) -> ExtractedOrderFields:
    """
    Extract order fields from a create-order utterance.

    Args:
        text: The raw utterance
        llm_client: LLMClient (or compatible) instance, None when no backend is configured

    Returns:
        ExtractedOrderFields, always populated. ``source`` tells which tier produced it.
    """
    if llm_client is None:
        logger.info("Extraction: fallback | reason=no_backend")
        return fallback_fields(text)

    try:
        response = llm_client.chat_completion(
            build_extraction_messages(text),
            temperature=LLM_EXTRACTION_TEMPERATURE,
        )
        parsed = find_json_object(response.get("content", ""))
    except ExtractionError as e:
        logger.warning(f"Extraction: fallback | reason={e.reason} | error={str(e)}")
        return fallback_fields(text)
    except Exception as e:
        logger.warning(f"Extraction: fallback | reason=llm_error | error={str(e)}")
        return fallback_fields(text)

    fields = coerce_fields(parsed, text)
    logger.info(
        f"Extraction: llm | item=\"{sanitize_log_string(fields.item)}\" | qty={fields.qty} | "
        f"assigned_to={fields.assigned_to} | pickup_time={fields.pickup_time}"
    )
    return fields
