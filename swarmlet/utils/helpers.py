"""Utility functions for message and tool-call processing."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Mapping

from swarmlet.utils.constants import ROLE_TOOL, ROLE_USER
from swarmlet.utils.exceptions import ParseError
from swarmlet.utils.types import ChatMessage

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def debug_log(logger: logging.Logger, debug: bool, msg: str, *args: Any) -> None:
    """Log a run trace line, promoted from DEBUG to INFO when the run asked for debug output."""
    logger.log(logging.INFO if debug else logging.DEBUG, msg, *args)


def sanitize_name(name: str) -> str:
    """Replace characters providers reject in message ``name`` fields with underscores."""
    return _INVALID_NAME_CHARS.sub("_", name)


def to_dict(obj: Any) -> Dict[str, Any]:
    """Convert a provider object (pydantic model, mapping or attribute bag) to a plain dict."""
    if isinstance(obj, Mapping):
        return dict(obj)
    if hasattr(obj, "model_dump"):
        return obj.model_dump(exclude_none=True)
    return {k: v for k, v in vars(obj).items() if not k.startswith("_") and v is not None}


def convert_message_to_openai_format(message: ChatMessage) -> Dict[str, Any]:
    """Convert internal ChatMessage format to OpenAI API format.

    The ``name`` field is sanitized; every other field is passed through.

    Args:
        message: Internal chat message dictionary

    Returns:
        OpenAI-formatted message dictionary
    """
    openai_msg: Dict[str, Any] = dict(message)
    openai_msg.setdefault("role", ROLE_USER)
    if openai_msg.get("name"):
        openai_msg["name"] = sanitize_name(openai_msg["name"])
    return openai_msg


def convert_messages_to_openai_format(messages: List[ChatMessage]) -> List[Dict[str, Any]]:
    """Convert list of internal ChatMessage format to OpenAI API format.

    Args:
        messages: List of internal chat message dictionaries

    Returns:
        List of OpenAI-formatted message dictionaries
    """
    return [convert_message_to_openai_format(msg) for msg in messages]


def parse_tool_call_arguments(tool_call: Dict[str, Any]) -> Dict[str, Any]:
    """Parse tool call arguments from OpenAI format.

    Args:
        tool_call: Tool call dictionary with function.arguments as JSON string

    Returns:
        Parsed arguments dictionary

    Raises:
        ParseError: If arguments are not a JSON object
    """
    name = extract_tool_name_from_call(tool_call)
    arguments_str = tool_call.get("function", {}).get("arguments") or "{}"
    try:
        args = json.loads(arguments_str)
    except json.JSONDecodeError as e:
        raise ParseError(name, str(e), original_error=e) from e
    if not isinstance(args, dict):
        raise ParseError(name, f"expected a JSON object, got {type(args).__name__}")
    return args


def extract_tool_name_from_call(tool_call: Dict[str, Any]) -> str:
    """Extract tool name from tool call dictionary.

    Args:
        tool_call: Tool call dictionary

    Returns:
        Tool name string
    """
    return tool_call.get("function", {}).get("name", "")


def create_tool_message(content: str, tool_call_id: str, tool_name: str) -> ChatMessage:
    """Create a tool-role message answering one tool call.

    Args:
        content: Normalized tool result value
        tool_call_id: ID of the tool call this message responds to
        tool_name: Name of the tool that was called

    Returns:
        Tool message dictionary
    """
    return {
        "role": ROLE_TOOL,
        "content": content,
        "name": tool_name,
        "tool_call_id": tool_call_id,
    }
