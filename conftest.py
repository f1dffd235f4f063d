"""
Pytest configuration and fixtures for courier-chat tests.

Provides a controllable clock, a scripted fake LLM client, and wired-up
store / context / interpreter / Flask client instances.
"""

import os

# Keep test runs from writing logs/ folders
os.environ.setdefault("LOG_TO_FILE", "false")

from datetime import datetime, timedelta, timezone

import pytest

from order_store import OrderStore
from context_store import ConversationContextStore
from command_interpreter import CommandInterpreter
from interpreter_registry import set_interpreter


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, amount):
        self.now = self.now + amount


class TickingClock(FakeClock):
    """Datetime clock that advances one second on every read."""

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


class FakeLLMClient:
    """
    Stand-in for LLMClient.chat_completion.

    replies: list of strings (returned in order, last one repeats) or
    exceptions (raised when reached).
    """

    def __init__(self, *replies):
        self.replies = list(replies) or ["{}"]
        self.calls = []

    def chat_completion(self, messages, temperature=0.2):
        self.calls.append({"messages": messages, "temperature": temperature})
        reply = self.replies[min(len(self.calls), len(self.replies)) - 1]
        if isinstance(reply, Exception):
            raise reply
        return {
            "content": reply,
            "input_tokens": 10,
            "output_tokens": 5,
            "total_tokens": 15,
            "model": "fake-model",
            "latency_ms": 1,
        }


@pytest.fixture
def fake_clock():
    return FakeClock(1000.0)


@pytest.fixture
def order_store():
    return OrderStore(clock=TickingClock(datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)))


@pytest.fixture
def contexts(fake_clock):
    return ConversationContextStore(max_users=10, ttl_seconds=600, clock=fake_clock)


@pytest.fixture
def interpreter(order_store, contexts):
    """Interpreter with no LLM backend (deterministic paths only)."""
    return CommandInterpreter(store=order_store, contexts=contexts, llm_client=None)


@pytest.fixture
def make_interpreter(order_store, contexts):
    def _make(llm_client):
        return CommandInterpreter(store=order_store, contexts=contexts, llm_client=llm_client)
    return _make


@pytest.fixture
def client(interpreter):
    """Flask test client bound to the `interpreter` fixture."""
    from server import app

    set_interpreter(interpreter)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
    set_interpreter(None)
