"""
LLM Client — chat completions for order-field extraction and free-text replies.

Configurable via environment variables (see app_config.py). When no API
credential is configured, get_llm_client() returns None and callers use
their deterministic fallback instead.
"""

import time
import requests
from typing import Dict, List, Optional, Any
from chat_logger import get_logger, sanitize_url
from app_config import (
    LLM_PROVIDER,
    LLM_MODEL,
    LLM_API_KEY,
    LLM_API_BASE_URL,
    LLM_CHAT_TEMPERATURE,
    LLM_MAX_TOKENS,
    LLM_TIMEOUT_SECONDS,
    LLM_FALLBACK_ENABLED,
    LLM_COST_PER_1K_INPUT,
    LLM_COST_PER_1K_OUTPUT,
)

logger = get_logger("courier_chat")

DEFAULT_API_URLS = {
    "groq": "https://api.groq.com/openai/v1/chat/completions",
    "openai": "https://api.openai.com/v1/chat/completions",
    "anthropic": "https://api.anthropic.com/v1/messages",
}

OPENAI_STYLE_PROVIDERS = ("groq", "openai", "azure_openai")


class LLMError(RuntimeError):
    """Raised when an LLM call fails (transport, HTTP status, or response shape)."""


def estimate_cost(input_tokens: int, output_tokens: int) -> float:
    input_cost = (input_tokens / 1000) * LLM_COST_PER_1K_INPUT
    output_cost = (output_tokens / 1000) * LLM_COST_PER_1K_OUTPUT
    return input_cost + output_cost


class LLMClient:
    """
    Abstraction over LLM providers.

    Supported providers:
    - groq: Groq OpenAI-compatible API
    - openai: OpenAI API
    - azure_openai: Azure OpenAI Service (LLM_API_BASE_URL required)
    - anthropic: Anthropic Messages API
    """

    def __init__(
        self,
        provider: str = LLM_PROVIDER,
        model: str = LLM_MODEL,
        api_key: str = LLM_API_KEY,
        api_url: str = LLM_API_BASE_URL,
        timeout: int = LLM_TIMEOUT_SECONDS,
        max_tokens: int = LLM_MAX_TOKENS,
    ):
        self.provider = provider.lower()
        self.model = model
        self.api_key = api_key
        self.timeout = timeout
        self.max_tokens = max_tokens

        if self.provider not in DEFAULT_API_URLS and self.provider != "azure_openai":
            raise ValueError(f"Unsupported LLM provider: {self.provider}")
        self.api_url = api_url or DEFAULT_API_URLS.get(self.provider, "")
        if not self.api_url:
            raise ValueError(f"LLM_API_BASE_URL is required for provider: {self.provider}")

        self.session = requests.Session()

    def chat_completion(
        self,
        messages: List[Dict[str, str]],
        temperature: float = LLM_CHAT_TEMPERATURE,
    ) -> Dict[str, Any]:
        """
        Send a chat completion request to the configured provider.

        Args:
            messages: OpenAI-style [{"role": ..., "content": ...}] list
            temperature: Sampling temperature

        Returns:
            Dict with content, input_tokens, output_tokens, total_tokens,
            model and latency_ms.

        Raises:
            LLMError: If the API call fails or the response is malformed
        """
        start_time = time.time()

        try:
            if self.provider in OPENAI_STYLE_PROVIDERS:
                result = self._openai_style_completion(messages, temperature)
            else:
                result = self._anthropic_completion(messages, temperature)
        except requests.exceptions.RequestException as e:
            logger.error(
                f"LLM API call failed | provider={self.provider} | "
                f"url={sanitize_url(self.api_url)} | error={str(e)}"
            )
            raise LLMError(str(e)) from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"LLM API returned an unexpected payload | provider={self.provider} | error={str(e)}")
            raise LLMError(f"Malformed LLM response: {e}") from e

        result["latency_ms"] = int((time.time() - start_time) * 1000)

        logger.info(
            f"LLM API call | model={result['model']} | "
            f"input_tokens={result['input_tokens']} | "
            f"output_tokens={result['output_tokens']} | "
            f"latency_ms={result['latency_ms']} | "
            f"cost_estimate=${estimate_cost(result['input_tokens'], result['output_tokens']):.4f}"
        )
        return result

    def _openai_style_completion(self, messages: List[Dict[str, str]], temperature: float) -> Dict[str, Any]:
        """OpenAI-compatible API call (Groq, OpenAI, Azure OpenAI)."""
        headers = {"Content-Type": "application/json"}
        if self.provider == "azure_openai":
            headers["api-key"] = self.api_key
        else:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": self.max_tokens,
        }

        response = self.session.post(self.api_url, headers=headers, json=payload, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()

        usage = data.get("usage") or {}
        return {
            "content": data["choices"][0]["message"]["content"] or "",
            "input_tokens": usage.get("prompt_tokens", 0),
            "output_tokens": usage.get("completion_tokens", 0),
            "total_tokens": usage.get("total_tokens", 0),
            "model": data.get("model", self.model),
        }

    def _anthropic_completion(self, messages: List[Dict[str, str]], temperature: float) -> Dict[str, Any]:
        """Anthropic Messages API call. System messages move to the top-level "system" field."""
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
        }

        system_parts = [m["content"] for m in messages if m.get("role") == "system"]
        chat_messages = [
            {"role": m["role"], "content": m["content"]}
            for m in messages
            if m.get("role") in ("user", "assistant")
        ]
        # the Messages API expects the conversation to open with a user turn
        while chat_messages and chat_messages[0]["role"] == "assistant":
            chat_messages.pop(0)

        payload = {
            "model": self.model,
            "messages": chat_messages,
            "temperature": temperature,
            "max_tokens": self.max_tokens,
        }
        if system_parts:
            payload["system"] = "\n\n".join(system_parts)

        response = self.session.post(self.api_url, headers=headers, json=payload, timeout=self.timeout)
        response.raise_for_status()
        data = response.json()

        usage = data.get("usage") or {}
        input_tokens = usage.get("input_tokens", 0)
        output_tokens = usage.get("output_tokens", 0)
        return {
            "content": data["content"][0]["text"],
            "input_tokens": input_tokens,
            "output_tokens": output_tokens,
            "total_tokens": input_tokens + output_tokens,
            "model": data.get("model", self.model),
        }


def get_llm_client() -> Optional[LLMClient]:
    """Build the configured client, or None when no backend is available."""
    if not LLM_FALLBACK_ENABLED:
        logger.info("LLM backend disabled | LLM_FALLBACK_ENABLED=false")
        return None
    if not LLM_API_KEY:
        logger.info("LLM backend not configured | no API key set, using deterministic fallbacks")
        return None
    try:
        return LLMClient()
    except ValueError as e:
        logger.warning(f"LLM backend misconfigured | error={str(e)}")
        return None
