"""Core orchestration loop - agents, tools, result normalization and the turn loop."""

from .agent import Agent
from .results import Result, handle_function_result
from .swarm import Response, RunState, Swarm
from .tools import Parameter, Tool, function_to_json, tool, tools_to_json

__all__ = [
    # Agents
    "Agent",
    # Tools
    "Parameter",
    "Tool",
    "tool",
    "function_to_json",
    "tools_to_json",
    # Results
    "Result",
    "handle_function_result",
    # Orchestrator
    "Response",
    "RunState",
    "Swarm",
]
