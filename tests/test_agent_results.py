"""Tests for agent definitions and tool result normalization."""

import dataclasses
import json

import pytest

from swarmlet import Agent, InvalidArgumentError, Result, Tool, TypeMismatchError, handle_function_result


def noop():
    return "ok"


def test_agent_defaults():
    agent = Agent(name="Helper")
    assert agent.instructions == "You are a helpful agent."
    assert agent.functions == ()
    assert agent.tool_choice == "auto"
    assert agent.parallel_tool_calls == 1


def test_agent_default_model_from_environment(monkeypatch):
    """Test the default model comes from SWARMLET_MODEL."""
    monkeypatch.setenv("SWARMLET_MODEL", "gpt-4o-mini")
    assert Agent(name="Helper").model == "gpt-4o-mini"
    monkeypatch.delenv("SWARMLET_MODEL")
    assert Agent(name="Helper").model == "gpt-4o"


def test_agent_registers_plain_callables():
    agent = Agent(name="Helper", functions=[noop])
    assert isinstance(agent.functions, tuple)
    assert isinstance(agent.functions[0], Tool)
    assert agent.get_tool("noop") is agent.functions[0]
    assert agent.get_tool("missing") is None


def test_agent_rejects_duplicate_tool_names():
    with pytest.raises(InvalidArgumentError):
        Agent(name="Helper", functions=[noop, Tool.from_function(noop)])


@pytest.mark.parametrize("kwargs", [
    {"name": ""},
    {"name": "Helper", "instructions": 3},
    {"name": "Helper", "parallel_tool_calls": 0},
])
def test_agent_rejects_invalid_definitions(kwargs):
    with pytest.raises(InvalidArgumentError):
        Agent(**kwargs)


def test_agent_is_immutable():
    agent = Agent(name="Helper")
    with pytest.raises(dataclasses.FrozenInstanceError):
        agent.name = "Other"


def test_render_instructions():
    """Test static and context-rendered instructions."""
    assert Agent(name="A", instructions="Be brief.").render_instructions({}) == "Be brief."
    dynamic = Agent(name="A", instructions=lambda ctx: f"User is {ctx['user']}")
    assert dynamic.render_instructions({"user": "Ada"}) == "User is Ada"


def test_handle_agent_result():
    """Test an Agent return value becomes a handoff."""
    target = Agent(name="Billing Agent")
    result = handle_function_result(target)
    assert result.agent is target
    assert result.is_handoff
    assert json.loads(result.value) == {"assistant": "Billing Agent"}


def test_handle_result_passthrough():
    original = Result(value="done", context_variables={"k": "v"})
    assert handle_function_result(original) is original


def test_handle_mapping_result():
    result = handle_function_result({"value": "done", "context_variables": {"k": 1}})
    assert result == Result(value="done", context_variables={"k": 1})


def test_handle_mapping_with_unknown_keys():
    """Test keys other than the Result fields are dropped."""
    assert handle_function_result({"value": "done", "status": 200}) == Result(value="done")


def test_handle_mapping_with_non_agent_handoff():
    with pytest.raises(TypeMismatchError):
        handle_function_result({"value": "moving", "agent": "Billing Agent"})


@pytest.mark.parametrize("raw,expected", [
    ("ok", "ok"),
    (42, "42"),
    (None, "None"),
    ({"status": "found"}, "{'status': 'found'}"),
])
def test_handle_coerces_to_string(raw, expected):
    result = handle_function_result(raw)
    assert result.value == expected
    assert result.agent is None
    assert result.context_variables == {}


def test_handle_uncoercible_result():
    """Test a value whose str() fails raises TypeMismatchError."""
    class Opaque:
        def __str__(self):
            raise RuntimeError("no string form")

    with pytest.raises(TypeMismatchError):
        handle_function_result(Opaque())


def test_result_value_coerced_to_string():
    assert Result(value=7).value == "7"


def test_result_uncoercible_value():
    """Test building a Result around a value whose str() fails raises TypeMismatchError."""
    class Opaque:
        def __str__(self):
            raise RuntimeError("no string form")

    with pytest.raises(TypeMismatchError):
        Result(value=Opaque())


def test_result_rejects_non_agent():
    with pytest.raises(TypeMismatchError):
        Result(value="moving", agent="Billing Agent")
