"""
Main entry point: runs commands through the interpreter from the console.

    python main.py            → scripted demo session
    python main.py -i         → interactive prompt (blank line exits)
"""

import json
import sys
from command_interpreter import CommandInterpreter
from llm_client import get_llm_client


def process(interpreter: CommandInterpreter, utterance: str, user_id: str = "console-user") -> dict:
    """Submit a single utterance and print the outcome."""
    response = interpreter.submit(utterance, user_id)

    print(f"\n{'━'*70}")
    print(f"💬  \"{utterance}\"")
    print(f"🎯  Action:     {response['action']}")
    print(f"🤖  Reply:      {response['reply']}")

    order = response.get("order")
    if order:
        print(f"📦  Order:      {json.dumps(order, indent=2)}")
    for o in response.get("orders", []):
        print(f"   • {o['trackingId']}  {o['item']} × {o['qty']}  [{o['status']}]")
    return response


def demo(interpreter: CommandInterpreter):
    created = process(interpreter, "Create order 2 boxes of mangoes for Ravi")
    tracking_id = created["order"]["trackingId"]

    tests = [
        f"track order {tracking_id}",
        f"update address of {tracking_id} to MG Road, Pune",
        f"update {tracking_id} add juice and bread status shipped",
        f"update {tracking_id} remove bread pickup at 5 pm assign to Kiran",
        "what's my next pickup?",
        "show my orders",
        f"cancel order {tracking_id}",
        "cancel order",
        f"delete order {tracking_id}",
        f"track order {tracking_id}",
        "how is the weather today?",
    ]
    for t in tests:
        process(interpreter, t)


if __name__ == "__main__":
    interpreter = CommandInterpreter(llm_client=get_llm_client())

    if "-i" in sys.argv[1:]:
        while True:
            try:
                line = input("\n> ").strip()
            except EOFError:
                break
            if not line:
                break
            process(interpreter, line)
    else:
        demo(interpreter)
