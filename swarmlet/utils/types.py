"""Type definitions for the swarm orchestration loop."""

from __future__ import annotations

from typing import Any, Callable, Dict, TypedDict, Union

# ChatMessage format: {"role": "system"|"user"|"assistant"|"tool", "content": str, ...}
# Optional fields: "name" (attribution), "tool_call_id" (for tool messages),
#                  "tool_calls" (for assistant messages)
ChatMessage = Dict[str, Any]

# Shared context threaded through a run and visible to tools and instructions
ContextVariables = Dict[str, Any]

# Instructions are either a fixed prompt or rendered from the shared context
InstructionsFn = Callable[[ContextVariables], str]
Instructions = Union[str, InstructionsFn]


class FunctionCall(TypedDict):
    name: str
    arguments: str


class ToolCall(TypedDict):
    """Tool call issued by the provider on an assistant message."""
    id: str
    type: str
    function: FunctionCall


class Event(TypedDict, total=False):
    """Run event dictionary.

    All events have a "type" field. Other fields depend on event type.
    """
    type: str  # turn_start, completion, tool_call, tool_result, handoff, run_complete
    turn: int
    agent: str  # Name of the active agent
    state: Any  # RunState, for turn_start and run_complete events
    message: ChatMessage  # For completion and tool_result events
    tool_call: ToolCall  # For tool_call events
    response: Any  # Response, for run_complete events


__all__ = [
    "ChatMessage",
    "ContextVariables",
    "Event",
    "FunctionCall",
    "Instructions",
    "InstructionsFn",
    "ToolCall",
]
