"""
Application configuration module for the Courier Chat command API.
Contains environment variables, constants, and settings.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# ═══════════════════════════════════════════
# ENVIRONMENT VARIABLES
# ═══════════════════════════════════════════

PORT = int(os.getenv("PORT", 5000))
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"

# ═══════════════════════════════════════════
# ORDER DEFAULTS
# ═══════════════════════════════════════════

DEFAULT_QTY = 1
DEFAULT_AMOUNT = 200
DEFAULT_EXPENSES = 50
DEFAULT_STATUS = "created"

# Statuses the next-pickup lookup considers "still to be picked up"
PICKUP_PENDING_STATUSES = ("created", "assigned", "pending")

RECENT_ORDERS_LIMIT = int(os.getenv("RECENT_ORDERS_LIMIT", 10))
MAX_ORDERS_PAGE = 50

# Provenance recorded on orders created through the command interpreter
ORDER_CREATED_VIA = "voice"

# ═══════════════════════════════════════════
# CONVERSATION CONTEXT
# ═══════════════════════════════════════════

DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "demo-user")
SYSTEM_PREAMBLE = "You are a concise task-focused assistant for deliveries."

CONTEXT_WINDOW = int(os.getenv("CONTEXT_WINDOW", 8))
CONTEXT_MAX_USERS = int(os.getenv("CONTEXT_MAX_USERS", 1000))
CONTEXT_TTL_SECONDS = float(os.getenv("CONTEXT_TTL_SECONDS", 3600))
CONTEXT_MAX_MESSAGES = int(os.getenv("CONTEXT_MAX_MESSAGES", 200))

# ═══════════════════════════════════════════
# LLM CONFIGURATION
# ═══════════════════════════════════════════

# LLM Provider settings
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "groq")  # groq, openai, azure_openai, anthropic
LLM_MODEL = os.getenv("LLM_MODEL", "llama-3.1-8b-instant")
LLM_API_KEY = os.getenv("LLM_API_KEY", "") or os.getenv("GROQ_API_KEY", "")
LLM_API_BASE_URL = os.getenv("LLM_API_BASE_URL", "")

# LLM behavior settings
LLM_EXTRACTION_TEMPERATURE = float(os.getenv("LLM_EXTRACTION_TEMPERATURE", "0.0"))
LLM_CHAT_TEMPERATURE = float(os.getenv("LLM_CHAT_TEMPERATURE", "0.2"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "500"))
LLM_TIMEOUT_SECONDS = int(os.getenv("LLM_TIMEOUT_SECONDS", "10"))

# Feature flags
LLM_FALLBACK_ENABLED = os.getenv("LLM_FALLBACK_ENABLED", "true").lower() == "true"

# Cost estimation (USD per 1000 tokens)
LLM_COST_PER_1K_INPUT = float(os.getenv("LLM_COST_PER_1K_INPUT", "0.00005"))
LLM_COST_PER_1K_OUTPUT = float(os.getenv("LLM_COST_PER_1K_OUTPUT", "0.00008"))

# ═══════════════════════════════════════════
# FIXED REPLIES
# ═══════════════════════════════════════════

NO_BACKEND_REPLY = "Sorry, I couldn't process that right now."
EMPTY_LLM_REPLY = "Sorry, I didn't get that."
INTERNAL_ERROR_REPLY = "Internal error"
