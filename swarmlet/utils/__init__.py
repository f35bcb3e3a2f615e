"""Utility functions for the swarm orchestration loop."""

from .exceptions import InvalidArgumentError, ParseError, SwarmError, TypeMismatchError
from .helpers import (
    convert_messages_to_openai_format,
    create_tool_message,
    debug_log,
    parse_tool_call_arguments,
    sanitize_name,
)

__all__ = [
    "SwarmError",
    "InvalidArgumentError",
    "ParseError",
    "TypeMismatchError",
    "convert_messages_to_openai_format",
    "create_tool_message",
    "debug_log",
    "parse_tool_call_arguments",
    "sanitize_name",
]
