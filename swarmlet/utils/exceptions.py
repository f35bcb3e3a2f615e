"""Custom exceptions for the swarm orchestration loop."""


class SwarmError(Exception):
    """Base exception for swarm-related errors."""
    pass


class InvalidArgumentError(SwarmError, ValueError):
    """Raised when a tool, agent or run argument is malformed."""
    pass


class ParseError(SwarmError, ValueError):
    """Raised when tool-call arguments cannot be parsed."""
    def __init__(self, tool_name: str, message: str, original_error: Exception | None = None):
        self.tool_name = tool_name
        self.original_error = original_error
        super().__init__(f"Invalid arguments for tool '{tool_name}': {message}")


class TypeMismatchError(SwarmError, TypeError):
    """Raised when a tool return value cannot be normalized into a Result."""
    pass
