"""Shared fixtures: a scripted in-memory stand-in for the chat completions client."""

import json
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Union

import pytest


def tool_call(call_id: str, name: str, arguments: Union[Dict[str, Any], str, None] = None) -> Dict[str, Any]:
    """Build an OpenAI-style tool call dict."""
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}


def completion(content: str = "", tool_calls: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Build a completion response dict with a single assistant choice."""
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = tool_calls
    return {"choices": [{"index": 0, "message": message}]}


class ScriptedCompletions:
    """Replays scripted responses and records every request.

    ``script`` is either a list of responses (a plain final answer is returned once it
    runs out) or a function of the request kwargs returning a response.
    """

    def __init__(self, script: Union[List[Any], Callable[[Dict[str, Any]], Any]], is_async: bool = True):
        self.script = script if callable(script) else list(script)
        self.is_async = is_async
        self.calls: List[Dict[str, Any]] = []

    def _next(self, kwargs: Dict[str, Any]) -> Any:
        self.calls.append(kwargs)
        if callable(self.script):
            return self.script(kwargs)
        if self.script:
            return self.script.pop(0)
        return completion("done")

    def create(self, **kwargs: Any) -> Any:
        if not self.is_async:
            return self._next(kwargs)

        async def _create() -> Any:
            return self._next(kwargs)

        return _create()


def make_client(script, is_async: bool = True) -> SimpleNamespace:
    completions = ScriptedCompletions(script, is_async=is_async)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


@pytest.fixture
def user_messages() -> List[Dict[str, Any]]:
    return [{"role": "user", "content": "Hello"}]
