"""Tool registration and JSON schema translation."""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..utils.constants import CTX_VARS_NAME
from ..utils.exceptions import InvalidArgumentError, ParseError
from ..utils.types import ContextVariables

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class Parameter:
    """A declared tool parameter."""
    name: str
    default: Any = _MISSING
    keyword_only: bool = False

    @property
    def required(self) -> bool:
        return self.default is _MISSING


@dataclass(frozen=True)
class Tool:
    """
    A host-side function exposed to the model.

    ``parameters`` is the declared call order. A parameter named ``context_variables``
    receives the live shared context and is never advertised to the model.
    """
    name: str
    func: Callable[..., Any] = field(compare=False)
    parameters: Tuple[Parameter, ...] = ()
    description: str = ""

    @classmethod
    def from_function(
        cls,
        func: Union[Callable[..., Any], "Tool"],
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> "Tool":
        """
        Register a callable as a tool, reading its parameters from its signature.

        Raises:
            InvalidArgumentError: If ``func`` is not callable
        """
        if isinstance(func, Tool):
            return func
        if not callable(func):
            raise InvalidArgumentError(f"Tool must be callable, got {type(func).__name__}")

        try:
            sig = inspect.signature(func)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Cannot read signature of {func!r}: {e}") from e

        params: List[Parameter] = []
        for p in sig.parameters.values():
            if p.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue
            default = _MISSING if p.default is inspect.Parameter.empty else p.default
            params.append(Parameter(p.name, default, p.kind is inspect.Parameter.KEYWORD_ONLY))

        tool_name = name or getattr(func, "__name__", None) or type(func).__name__
        if description is None:
            description = inspect.getdoc(func) or ""
        return cls(name=tool_name, func=func, parameters=tuple(params), description=description)

    def bind(self, args: Dict[str, Any], context_variables: ContextVariables) -> Tuple[List[Any], Dict[str, Any]]:
        """
        Map model-supplied arguments onto the declared parameter order.

        The shared context is injected for ``context_variables``, overriding anything the
        model sent for it. Missing parameters fall back to their defaults.

        Raises:
            ParseError: If a required parameter is missing
        """
        positional: List[Any] = []
        keyword: Dict[str, Any] = {}
        for p in self.parameters:
            if p.name == CTX_VARS_NAME:
                value = context_variables
            elif p.name in args:
                value = args[p.name]
            elif not p.required:
                value = p.default
            else:
                raise ParseError(self.name, f"missing required argument '{p.name}'")
            if p.keyword_only:
                keyword[p.name] = value
            else:
                positional.append(value)

        unexpected = set(args) - {p.name for p in self.parameters}
        if unexpected:
            logger.warning("Ignoring unexpected arguments for tool %s: %s", self.name, sorted(unexpected))
        return positional, keyword

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.func(*args, **kwargs)


def tool(
    func: Optional[Callable[..., Any]] = None,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Any:
    """Decorator registering a function as a Tool, usable bare or with overrides."""
    def wrap(f: Callable[..., Any]) -> Tool:
        return Tool.from_function(f, name=name, description=description)

    if func is None:
        return wrap
    return wrap(func)


def function_to_json(func: Union[Callable[..., Any], Tool]) -> Dict[str, Any]:
    """
    Build an OpenAI-style function tool schema.

    Every parameter is advertised as a string; parameters without a default are
    required. ``context_variables`` is stripped from both ``properties`` and ``required``.

    Raises:
        InvalidArgumentError: If ``func`` is neither a Tool nor callable
    """
    t = Tool.from_function(func)
    properties: Dict[str, Any] = {}
    required: List[str] = []
    for p in t.parameters:
        if p.name == CTX_VARS_NAME:
            continue
        properties[p.name] = {"type": "string"}
        if p.required:
            required.append(p.name)

    return {
        "type": "function",
        "function": {
            "name": t.name,
            "description": t.description,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": required,
            },
        },
    }


def tools_to_json(tools: Sequence[Union[Callable[..., Any], Tool]]) -> List[Dict[str, Any]]:
    """Build schemas for a sequence of tools, preserving order."""
    return [function_to_json(t) for t in tools]
