"""
Command Interpreter — the single entry point for free-text order commands.

    text → classify → OrderHandler (create/track/update/...) → reply
                    └→ no rule matched → LLM chat over recent context

The user's utterance is recorded in their conversation context before
handling, the reply after. Unexpected errors propagate to the caller
(the HTTP layer turns them into a 500).
"""

from typing import Dict, List, Optional

from models import Action
from classifier import classify
from order_handler import OrderHandler, build_response
from order_store import OrderStore
from context_store import ConversationContextStore
from chat_logger import get_logger, sanitize_log_string
from app_config import LLM_CHAT_TEMPERATURE, NO_BACKEND_REPLY, EMPTY_LLM_REPLY

logger = get_logger("courier_chat")


def to_chat_messages(history: List[Dict]) -> List[Dict]:
    """Role + content only; a name is kept for function messages."""
    chat_messages = []
    for message in history:
        if message["role"] == "function":
            chat_messages.append({
                "role": "function",
                "name": message.get("name") or "fn",
                "content": message["content"],
            })
        else:
            chat_messages.append({"role": message["role"], "content": message["content"]})
    return chat_messages


class CommandInterpreter:

    def __init__(
        self,
        store: Optional[OrderStore] = None,
        contexts: Optional[ConversationContextStore] = None,
        llm_client=None,
        order_handler: Optional[OrderHandler] = None,
    ):
        self.store = store if store is not None else OrderStore()
        self.contexts = contexts if contexts is not None else ConversationContextStore()
        self.llm_client = llm_client
        self.orders = order_handler or OrderHandler(self.store, llm_client=llm_client)

    def submit(self, text: str, user_id: str) -> Dict:
        """
        Interpret one command for *user_id*.

        Returns:
            Dict with "reply" and "action", plus "order", "orders" or
            "trackingId" depending on the action.
        """
        self.contexts.append(user_id, "user", text)

        command = classify(text)
        logger.info(
            f"Command classified | user={user_id} | intent={command.intent.value} | "
            f"tracking_id={command.tracking_id} | text=\"{sanitize_log_string(text[:100])}\""
        )

        if self.orders.handles(command.intent):
            response = self.orders.handle(command, text, user_id)
        else:
            response = self.general_reply(user_id)

        self.contexts.append(user_id, "assistant", response["reply"])
        logger.info(f"Command handled | user={user_id} | action={response['action']}")
        return response

    def general_reply(self, user_id: str) -> Dict:
        """Free-text fallback: forward the recent context to the chat model."""
        if self.llm_client is None:
            return build_response(Action.FALLBACK, NO_BACKEND_REPLY)

        chat_messages = to_chat_messages(self.contexts.recent(user_id))
        try:
            result = self.llm_client.chat_completion(chat_messages, temperature=LLM_CHAT_TEMPERATURE)
        except Exception as e:
            # a failing chat backend answers with the fixed apology, never a 500
            logger.error(f"Chat fallback failed | user={user_id} | error={str(e)}")
            return build_response(Action.FALLBACK, NO_BACKEND_REPLY)

        reply = result.get("content") or EMPTY_LLM_REPLY
        return build_response(Action.LLM_REPLY, reply)

