"""Swarm orchestrator - the turn loop with tool execution and agent handoffs."""

from __future__ import annotations

import asyncio
import inspect
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

from openai import AsyncOpenAI

from ..config import Settings, get_settings
from ..utils.constants import (
    EVENT_COMPLETION,
    EVENT_HANDOFF,
    EVENT_RUN_COMPLETE,
    EVENT_TOOL_CALL,
    EVENT_TOOL_RESULT,
    EVENT_TURN_START,
    ROLE_ASSISTANT,
    ROLE_SYSTEM,
    TOOL_NOT_FOUND_TEMPLATE,
)
from ..utils.exceptions import InvalidArgumentError, SwarmError
from ..utils.helpers import (
    convert_messages_to_openai_format,
    create_tool_message,
    debug_log,
    extract_tool_name_from_call,
    parse_tool_call_arguments,
    to_dict,
)
from ..utils.types import ChatMessage, ContextVariables, Event, ToolCall
from .agent import Agent
from .results import handle_function_result
from .tools import tools_to_json

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    """States of the turn loop."""
    RUNNING = "running"
    AWAITING_COMPLETION = "awaiting_completion"
    EXECUTING_TOOLS = "executing_tools"
    TERMINATED = "terminated"


@dataclass
class Response:
    """Outcome of a run (or of one tool batch inside it)."""
    messages: List[ChatMessage] = field(default_factory=list)
    agent: Optional[Agent] = None
    context_variables: ContextVariables = field(default_factory=dict)


def _normalize_tool_call(tool_call: Any) -> ToolCall:
    tc = to_dict(tool_call)
    fn = to_dict(tc.get("function") or {})
    return {
        "id": str(tc.get("id", "") or ""),
        "type": tc.get("type", "function"),
        "function": {"name": str(fn.get("name", "") or ""), "arguments": fn.get("arguments") or "{}"},
    }


def _first_message(completion: Any) -> ChatMessage:
    """Extract choices[0].message from a completion object or dict as a plain dict."""
    choices = completion["choices"] if isinstance(completion, Mapping) else completion.choices
    if not choices:
        raise InvalidArgumentError("Provider returned a completion without choices")
    choice = choices[0]
    message = choice["message"] if isinstance(choice, Mapping) else choice.message
    msg = to_dict(message)
    msg.setdefault("role", ROLE_ASSISTANT)
    if msg.get("content") is None:
        msg["content"] = ""
    if msg.get("tool_calls"):
        msg["tool_calls"] = [_normalize_tool_call(tc) for tc in msg["tool_calls"]]
    else:
        msg.pop("tool_calls", None)
    return msg


class Swarm:
    """
    Drives a conversation across agents.

    Each turn requests a completion for the active agent, executes the tool calls it
    asks for in request order, merges context updates and follows handoffs. A Swarm
    holds no per-run state, so one instance can serve concurrent runs.
    """

    def __init__(self, client: Any = None, settings: Optional[Settings] = None):
        """Initialize the orchestrator.

        Args:
            client: Object exposing ``chat.completions.create``. Both ``OpenAI`` and
                ``AsyncOpenAI`` work. If None, an ``AsyncOpenAI`` is built from settings.
            settings: Settings to build the default client from. Defaults to the environment.
        """
        self.settings = settings or get_settings()
        if client is None:
            client_kwargs = {}
            if self.settings.api_key:
                client_kwargs["api_key"] = self.settings.api_key
            if self.settings.base_url:
                client_kwargs["base_url"] = self.settings.base_url
            client = AsyncOpenAI(**client_kwargs)
        self.client = client

    async def get_chat_completion(
        self,
        agent: Agent,
        history: List[ChatMessage],
        context_variables: ContextVariables,
        model_override: Optional[str] = None,
        debug: bool = False,
    ) -> ChatMessage:
        """Request one assistant message for ``agent`` given the running history."""
        instructions = agent.render_instructions(context_variables)
        messages = [{"role": ROLE_SYSTEM, "content": instructions}] + history
        debug_log(logger, debug, "Getting chat completion for: %s", messages)

        create_params: Dict[str, Any] = {
            "model": model_override or agent.model,
            "messages": convert_messages_to_openai_format(messages),
            "stream": False,
        }
        tools = tools_to_json(agent.functions)
        if tools:
            create_params["tools"] = tools
            create_params["tool_choice"] = agent.tool_choice
            create_params["parallel_tool_calls"] = agent.parallel_tool_calls > 1

        completion = self.client.chat.completions.create(**create_params)
        if inspect.isawaitable(completion):
            completion = await completion
        return _first_message(completion)

    async def handle_tool_calls(
        self,
        tool_calls: List[ToolCall],
        agent: Agent,
        context_variables: ContextVariables,
        debug: bool = False,
    ) -> Response:
        """
        Execute one batch of tool calls in request order.

        Returns a partial Response holding the tool messages, the merged context
        updates (later calls overwrite earlier ones) and the handoff agent, if any.
        When several calls hand off, the last one processed wins.
        """
        partial = Response()
        handoffs = 0

        for tool_call in tool_calls:
            name = extract_tool_name_from_call(tool_call)
            tool_call_id = tool_call.get("id", "")
            tool = agent.get_tool(name)
            if tool is None:
                logger.warning("Tool %s not found in function map of agent %s.", name, agent.name)
                partial.messages.append(
                    create_tool_message(TOOL_NOT_FOUND_TEMPLATE.format(name=name), tool_call_id, name)
                )
                continue

            args = parse_tool_call_arguments(tool_call)
            debug_log(logger, debug, "Processing tool call: %s with arguments %s", name, args)

            positional, keyword = tool.bind(args, context_variables)
            raw_result = tool(*positional, **keyword)
            if inspect.isawaitable(raw_result):
                raw_result = await raw_result
            result = handle_function_result(raw_result, debug)

            partial.messages.append(create_tool_message(result.value, tool_call_id, name))
            partial.context_variables.update(result.context_variables)
            if result.agent is not None:
                handoffs += 1
                partial.agent = result.agent

        if handoffs > 1:
            logger.warning(
                "%d tool calls requested a handoff in one batch; switching to the last one (%s)",
                handoffs,
                partial.agent.name,
            )
        return partial

    async def iter_run(
        self,
        agent: Agent,
        messages: List[ChatMessage],
        context_variables: Optional[ContextVariables] = None,
        model_override: Optional[str] = None,
        max_turns: float = math.inf,
        execute_tools: bool = True,
        debug: bool = False,
    ) -> AsyncIterator[Event]:
        """
        Run the turn loop, yielding events as it proceeds.

        Yields:
        - `{type: "turn_start", turn, agent, state}`
        - `{type: "completion", turn, agent, state, message}` with state AWAITING_COMPLETION
        - `{type: "tool_call", turn, agent, state, tool_call}` for each requested call, with state EXECUTING_TOOLS
        - `{type: "tool_result", turn, agent, message}` for each tool message
        - `{type: "handoff", turn, agent}` naming the new active agent
        - `{type: "run_complete", turn, agent, state, response}` last
        """
        if not messages:
            raise InvalidArgumentError("A run needs at least one message")
        if max_turns < 0:
            raise InvalidArgumentError(f"max_turns must be non-negative, got {max_turns}")

        active_agent = agent
        context_variables = dict(context_variables or {})
        history = list(messages)
        init_len = len(history)
        turns = 0
        state = RunState.RUNNING

        while turns < max_turns:
            yield {"type": EVENT_TURN_START, "turn": turns + 1, "agent": active_agent.name, "state": state}

            state = RunState.AWAITING_COMPLETION
            message = await self.get_chat_completion(
                active_agent, history, context_variables, model_override, debug
            )
            debug_log(logger, debug, "Received completion: %s", message)
            message["name"] = active_agent.name
            history.append(message)
            yield {"type": EVENT_COMPLETION, "turn": turns + 1, "agent": active_agent.name, "state": state, "message": message}

            tool_calls = message.get("tool_calls") or []
            if not tool_calls or not execute_tools:
                debug_log(logger, debug, "Ending turn.")
                turns += 1
                break

            state = RunState.EXECUTING_TOOLS
            for tool_call in tool_calls:
                yield {
                    "type": EVENT_TOOL_CALL,
                    "turn": turns + 1,
                    "agent": active_agent.name,
                    "state": state,
                    "tool_call": tool_call,
                }

            partial = await self.handle_tool_calls(tool_calls, active_agent, context_variables, debug)
            history.extend(partial.messages)
            context_variables.update(partial.context_variables)
            for tool_message in partial.messages:
                yield {"type": EVENT_TOOL_RESULT, "turn": turns + 1, "agent": active_agent.name, "message": tool_message}

            if partial.agent is not None:
                logger.info("Handing off from %s to %s", active_agent.name, partial.agent.name)
                active_agent = partial.agent
                yield {"type": EVENT_HANDOFF, "turn": turns + 1, "agent": active_agent.name}

            state = RunState.RUNNING
            turns += 1

        state = RunState.TERMINATED
        response = Response(
            messages=history[init_len:],
            agent=active_agent,
            context_variables=context_variables,
        )
        yield {"type": EVENT_RUN_COMPLETE, "turn": turns, "agent": active_agent.name, "state": state, "response": response}

    async def run(
        self,
        agent: Agent,
        messages: List[ChatMessage],
        context_variables: Optional[ContextVariables] = None,
        model_override: Optional[str] = None,
        max_turns: float = math.inf,
        execute_tools: bool = True,
        debug: bool = False,
    ) -> Response:
        """
        Run the conversation until the model stops calling tools or ``max_turns`` is hit.

        Args:
            agent: Starting agent
            messages: Initial history (not included in the returned messages)
            context_variables: Initial shared context, copied at run start
            model_override: Model used for every turn instead of each agent's own
            max_turns: Upper bound on loop iterations (unbounded by default)
            execute_tools: If False, the run ends after the first completion
            debug: Promote trace logging to INFO

        Returns:
            Response with the new messages, the final active agent and the final context

        Raises:
            InvalidArgumentError: On empty history or negative max_turns
            ParseError: If the model sends malformed tool arguments
            TypeMismatchError: If a tool result cannot be normalized
        """
        async for event in self.iter_run(
            agent,
            messages,
            context_variables=context_variables,
            model_override=model_override,
            max_turns=max_turns,
            execute_tools=execute_tools,
            debug=debug,
        ):
            if event["type"] == EVENT_RUN_COMPLETE:
                return event["response"]
        raise SwarmError("Run ended without a run_complete event")

    def run_sync(self, *args: Any, **kwargs: Any) -> Response:
        """Blocking wrapper around ``run`` for callers without an event loop."""
        return asyncio.run(self.run(*args, **kwargs))
