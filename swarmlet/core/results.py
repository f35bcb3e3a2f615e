"""Tool result normalization."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ..utils.exceptions import TypeMismatchError
from ..utils.helpers import debug_log
from ..utils.types import ContextVariables
from .agent import Agent

logger = logging.getLogger(__name__)


def _coerce_to_str(value: Any) -> str:
    try:
        return str(value)
    except Exception as e:
        raise TypeMismatchError(
            f"Failed to cast response to string: {type(value).__name__} value. Make sure agent functions "
            f"return a string or Result object. Error: {e}"
        ) from e


@dataclass
class Result:
    """
    Uniform envelope for a tool call outcome.

    Attributes:
        value: Content of the tool-role message sent back to the model
        agent: Agent to hand off to, if any
        context_variables: Updates merged into the shared context
    """
    value: str = ""
    agent: Optional[Agent] = None
    context_variables: ContextVariables = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            self.value = _coerce_to_str(self.value)
        if self.agent is not None and not isinstance(self.agent, Agent):
            raise TypeMismatchError(
                f"Result agent must be an Agent, got {type(self.agent).__name__}"
            )
        if self.context_variables is None:
            self.context_variables = {}
        elif not isinstance(self.context_variables, Mapping):
            raise TypeMismatchError(
                f"Result context_variables must be a mapping, got {type(self.context_variables).__name__}"
            )

    @classmethod
    def text(cls, value: str) -> "Result":
        return cls(value=value)

    @classmethod
    def handoff(cls, agent: Agent) -> "Result":
        """Result signalling a switch of the active agent."""
        return cls(value=json.dumps({"assistant": agent.name}), agent=agent)

    @property
    def is_handoff(self) -> bool:
        return self.agent is not None


def handle_function_result(result: Any, debug: bool = False) -> Result:
    """
    Normalize a raw tool return value into a Result.

    An Agent becomes a handoff, a Result (or a mapping with a ``value`` key) passes
    through, anything else is coerced with ``str()``.

    Raises:
        TypeMismatchError: If the value cannot be normalized
    """
    if isinstance(result, Result):
        return result
    if isinstance(result, Agent):
        return Result.handoff(result)
    if isinstance(result, Mapping) and "value" in result:
        # keys other than the Result fields are dropped
        return Result(
            value=result["value"],
            agent=result.get("agent"),
            context_variables=result.get("context_variables"),
        )

    try:
        return Result.text(_coerce_to_str(result))
    except TypeMismatchError as e:
        debug_log(logger, debug, str(e))
        raise
