"""Constants for the swarm orchestration loop."""

# Events emitted by Swarm.iter_run
EVENT_TURN_START = "turn_start"
EVENT_COMPLETION = "completion"
EVENT_TOOL_CALL = "tool_call"
EVENT_TOOL_RESULT = "tool_result"
EVENT_HANDOFF = "handoff"
EVENT_RUN_COMPLETE = "run_complete"

# Message roles
ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_TOOL = "tool"

# Tool parameter that receives the live shared context instead of a model argument
CTX_VARS_NAME = "context_variables"

# Default values
DEFAULT_MODEL = "gpt-4o"
DEFAULT_TOOL_CHOICE = "auto"
DEFAULT_PARALLEL_TOOL_CALLS = 1
DEFAULT_LOG_LEVEL = "INFO"

TOOL_NOT_FOUND_TEMPLATE = "Error: Tool {name} not found."
