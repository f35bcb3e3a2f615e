"""Swarmlet - multi-agent orchestration over chat completions with tools and handoffs."""

from .config import Settings, configure_logging, get_settings
from .core import (
    Agent,
    Parameter,
    Response,
    Result,
    RunState,
    Swarm,
    Tool,
    function_to_json,
    handle_function_result,
    tool,
    tools_to_json,
)
from .utils.exceptions import InvalidArgumentError, ParseError, SwarmError, TypeMismatchError

__all__ = [
    # Core execution
    "Swarm",
    "Response",
    "RunState",
    # Agents and tools
    "Agent",
    "Tool",
    "Parameter",
    "tool",
    "function_to_json",
    "tools_to_json",
    # Results
    "Result",
    "handle_function_result",
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Errors
    "SwarmError",
    "InvalidArgumentError",
    "ParseError",
    "TypeMismatchError",
]
