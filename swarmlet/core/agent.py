"""Agent definitions: a named persona with instructions, tools and a model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from ..config import get_settings
from ..utils.constants import DEFAULT_PARALLEL_TOOL_CALLS, DEFAULT_TOOL_CHOICE
from ..utils.exceptions import InvalidArgumentError
from ..utils.types import ContextVariables, Instructions
from .tools import Tool


def _default_model() -> str:
    return get_settings().model


@dataclass(frozen=True)
class Agent:
    """
    Immutable agent definition.

    ``instructions`` is either a fixed system prompt or a function of the shared
    context returning one. ``functions`` accepts Tool instances or plain callables;
    callables are registered with ``Tool.from_function``. A handoff swaps the active
    Agent for another instance, so definitions can be shared between concurrent runs.
    """
    name: str
    instructions: Instructions = "You are a helpful agent."
    functions: Tuple[Tool, ...] = ()
    model: str = field(default_factory=_default_model)
    tool_choice: str = DEFAULT_TOOL_CHOICE
    parallel_tool_calls: int = DEFAULT_PARALLEL_TOOL_CALLS

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgumentError("Agent name must be a non-empty string")
        if not (isinstance(self.instructions, str) or callable(self.instructions)):
            raise InvalidArgumentError(f"Agent '{self.name}' instructions must be a string or callable")
        if self.parallel_tool_calls < 1:
            raise InvalidArgumentError(f"Agent '{self.name}' parallel_tool_calls must be positive")

        tools = tuple(Tool.from_function(f) for f in self.functions)
        seen = set()
        for t in tools:
            if t.name in seen:
                raise InvalidArgumentError(f"Agent '{self.name}' has duplicate tool '{t.name}'")
            seen.add(t.name)
        # frozen dataclass: normalized tools are written through object.__setattr__
        object.__setattr__(self, "functions", tools)

    def render_instructions(self, context_variables: ContextVariables) -> str:
        """Render the system prompt for the current shared context."""
        if callable(self.instructions):
            return self.instructions(context_variables)
        return self.instructions

    def get_tool(self, name: str) -> Tool | None:
        """Find a registered tool by exact name."""
        for t in self.functions:
            if t.name == name:
                return t
        return None
