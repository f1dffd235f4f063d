"""
Deterministic field extractors for order commands.

Everything here is pure regex work on the raw utterance:
  - tracking ids ("ORD-ABC123")
  - assignee ("assign to Ravi")
  - status keywords ("delivered", "processing", "shipped")
  - pickup time of day ("5 pm", "5:30pm", "17:45")
  - add/remove item lists ("add juice and milk remove bread")
"""

import re
from datetime import datetime, timedelta
from typing import List, Optional

TRACKING_ID_RE = re.compile(r"\bORD-[A-Za-z0-9]+\b", re.IGNORECASE)
CANCEL_ID_RE = re.compile(r"\bcancel\s+order\s+([A-Za-z0-9\-]+)", re.IGNORECASE)
PICKUP_KEYWORD_RE = re.compile(r"\bpick\s?up\b", re.IGNORECASE)
PICKUP_TIME_RE = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s*(am|pm)?\b", re.IGNORECASE)
ASSIGNEE_RE = re.compile(r"\bassign(?:\s+to)?\s+([A-Za-z ]+)", re.IGNORECASE)

# Checked in this order, not by position in the text
STATUS_KEYWORDS = ("delivered", "processing", "shipped")

# Keywords that open a new clause inside an update command
CONTROL_KEYWORDS = ("add", "remove", "status", "assign", "pickup")
_KEYWORD_PATTERNS = {
    "add": r"\badd\b",
    "remove": r"\bremove\b",
    "status": r"\bstatus\b",
    "assign": r"\bassign\b",
    "pickup": r"\bpick\s?up\b",
}
ITEM_SEPARATOR_RE = re.compile(r"\s*(?:,|\band\b)\s*", re.IGNORECASE)
TRAILING_SEPARATOR_RE = re.compile(r"(?:\s*(?:,|\band\b))+\s*$", re.IGNORECASE)


# ═══════════════════════════════════════════
# TRACKING IDS
# ═══════════════════════════════════════════

def extract_tracking_id(text: str) -> Optional[str]:
    """First ORD-xxxx token anywhere in the text, upper-cased."""
    match = TRACKING_ID_RE.search(text or "")
    return match.group(0).upper() if match else None


def extract_cancel_id(text: str) -> Optional[str]:
    """Order id that directly follows "cancel order"."""
    match = CANCEL_ID_RE.search(text or "")
    return match.group(1).upper() if match else None


def strip_tracking_id(text: str) -> str:
    """Remove every ORD-xxxx token so its digits never read as a time or an item."""
    return re.sub(r"\s{2,}", " ", TRACKING_ID_RE.sub(" ", text or "")).strip()


def text_after_tracking_id(text: str, tracking_id: str) -> str:
    """
    Everything after the tracking id, with a leading "to ", "is " or ":"
    stripped (in that order). Used as the new address.
    """
    match = re.search(re.escape(tracking_id), text, re.IGNORECASE)
    if not match:
        return ""
    rest = text[match.end():].strip()
    if rest.lower().startswith("to "):
        rest = rest[3:].strip()
    if rest.lower().startswith("is "):
        rest = rest[3:].strip()
    if rest.startswith(":"):
        rest = rest[1:].strip()
    return rest


# ═══════════════════════════════════════════
# ASSIGNEE / STATUS
# ═══════════════════════════════════════════

def extract_assignee(text: str) -> Optional[str]:
    """Name following "assign" or "assign to", cut before the next clause keyword."""
    match = ASSIGNEE_RE.search(text or "")
    if not match:
        return None
    name = _truncate_at_keywords(match.group(1), exclude="assign")
    name = TRAILING_SEPARATOR_RE.sub("", name).strip()
    return name or None


def extract_status(text: str) -> Optional[str]:
    lower = (text or "").lower()
    for status in STATUS_KEYWORDS:
        if re.search(rf"\b{status}\b", lower):
            return status
    return None


# ═══════════════════════════════════════════
# PICKUP TIME
# ═══════════════════════════════════════════

def mentions_pickup(text: str) -> bool:
    return bool(PICKUP_KEYWORD_RE.search(text or ""))


def extract_pickup_time(text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a time of day like "5 pm", "5:30pm" or "17:45" into the next
    datetime it occurs at. A time that has already passed today (or is
    exactly now) rolls over to tomorrow.
    """
    match = PICKUP_TIME_RE.search(text or "")
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    meridiem = (match.group(3) or "").lower()

    if meridiem == "pm" and hour < 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0

    if hour > 23 or minute > 59:
        return None

    now = now or datetime.now()
    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


# ═══════════════════════════════════════════
# ITEM LIST SUB-PARSER
# ═══════════════════════════════════════════

def _truncate_at_keywords(segment: str, exclude: str) -> str:
    """Cut the segment at the first control keyword other than *exclude*."""
    cut = len(segment)
    for keyword in CONTROL_KEYWORDS:
        if keyword == exclude:
            continue
        match = re.search(_KEYWORD_PATTERNS[keyword], segment, re.IGNORECASE)
        if match:
            cut = min(cut, match.start())
    return segment[:cut]


def split_item_segment(text: str, keyword: str) -> str:
    """
    Text after the first whole-word *keyword* ("add" / "remove"), up to
    the next control keyword. Empty string when the keyword is absent.
    """
    match = re.search(_KEYWORD_PATTERNS[keyword], text or "", re.IGNORECASE)
    if not match:
        return ""
    return _truncate_at_keywords(text[match.end():], exclude=keyword)


def parse_item_list(segment: str) -> List[str]:
    """Split "juice, milk and eggs" into ["juice", "milk", "eggs"]."""
    items = []
    for part in ITEM_SEPARATOR_RE.split(segment or ""):
        part = part.strip().strip(".!?").strip()
        if part:
            items.append(part)
    return items


def add_items(existing: Optional[str], new_items: List[str]) -> str:
    parts = [existing] if existing else []
    if new_items:
        parts.append(", ".join(new_items))
    return ", ".join(parts)


def remove_items(existing: str, names: List[str]) -> str:
    """Drop each name (case-insensitive, whole word) and tidy leftover commas."""
    result = existing or ""
    for name in names:
        result = re.sub(rf"\b{re.escape(name)}\b\s*,?\s*", "", result, flags=re.IGNORECASE)
    result = re.sub(r",\s*,", ", ", result)
    result = re.sub(r"^\s*,\s*|\s*,\s*$", "", result)
    return result.strip()
