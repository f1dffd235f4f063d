"""
Registry for the process-wide CommandInterpreter used by the HTTP routes.
"""

from command_interpreter import CommandInterpreter
from llm_client import get_llm_client

_interpreter = None


def set_interpreter(interpreter):
    global _interpreter
    _interpreter = interpreter


def get_interpreter() -> CommandInterpreter:
    """Return the registered interpreter, building the default one on first use."""
    global _interpreter
    if _interpreter is None:
        _interpreter = CommandInterpreter(llm_client=get_llm_client())
    return _interpreter
