"""
Contract with the external code intelligence service.

The service receives the active file's content and returns text. Everything
about how it produces that text (model, prompts, transport) is outside
scribe.
"""

import re
from enum import Enum
from typing import Optional, Protocol


class AssistAction(str, Enum):
    """Requests the code intelligence service understands."""

    RUN = "run"
    EXPLAIN = "explain"
    FIX = "fix"
    FORMAT = "format"
    COMPLETE = "complete"


# Terminal text reported when the service fails
FAILURE_MESSAGES = {
    AssistAction.RUN: "Failed to execute code.",
    AssistAction.EXPLAIN: "Error connecting to AI Assistant.",
    AssistAction.FIX: "Error connecting to AI Assistant.",
    AssistAction.FORMAT: "Formatting failed.",
    AssistAction.COMPLETE: "Completion failed.",
}

_PYTHON_FENCE = re.compile(r"```python([\s\S]*?)```")
_ANY_FENCE = re.compile(r"```([\s\S]*?)```")
_LEADING_FENCE = re.compile(r"^```(python)?\n")
_TRAILING_FENCE = re.compile(r"```$")


class CodeAssistant(Protocol):
    """An external service that turns code into text."""

    async def request(self, action: AssistAction, code: str) -> str: ...


def extract_code_block(text: str) -> str:
    """
    Pull the code out of a fenced block.

    A ```python fence wins over a bare ``` fence. Text without a fence is
    returned unchanged.
    """
    match = _PYTHON_FENCE.search(text) or _ANY_FENCE.search(text)
    if match:
        return match.group(1).strip()
    return text


def strip_code_fences(text: str) -> str:
    """Remove a fence wrapping the whole text, as formatters sometimes add."""
    if text.startswith("```"):
        text = _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", text))
    return text.strip()


def postprocess(action: AssistAction, response: str, original: str) -> Optional[str]:
    """
    Normalize a service response for the given action.

    Returns None when the response carries nothing usable.
    """
    if action == AssistAction.FIX:
        return extract_code_block(response)
    if action == AssistAction.FORMAT:
        return strip_code_fences(response or original)
    if action == AssistAction.EXPLAIN:
        return response or "No explanation provided."
    if action == AssistAction.COMPLETE:
        return response or None
    return response
