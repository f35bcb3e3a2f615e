"""Tests for message helpers and configuration."""

import logging

import pytest

from swarmlet import ParseError, Settings, get_settings
from swarmlet.utils.helpers import (
    convert_messages_to_openai_format,
    create_tool_message,
    debug_log,
    parse_tool_call_arguments,
    sanitize_name,
    to_dict,
)


@pytest.mark.parametrize("name,expected", [
    ("Triage Agent", "Triage_Agent"),
    ("agent-1_ok", "agent-1_ok"),
    ("Flight cancel traversal!", "Flight_cancel_traversal_"),
    ("Zoë", "Zo_"),
])
def test_sanitize_name(name, expected):
    assert sanitize_name(name) == expected


def test_convert_messages_keeps_fields():
    messages = [
        {"role": "assistant", "content": "", "name": "A B", "tool_calls": []},
        {"content": "no role"},
    ]
    converted = convert_messages_to_openai_format(messages)
    assert converted[0] == {"role": "assistant", "content": "", "name": "A_B", "tool_calls": []}
    assert converted[1] == {"role": "user", "content": "no role"}
    assert messages[0]["name"] == "A B"


def test_parse_tool_call_arguments():
    call = {"id": "c", "function": {"name": "f", "arguments": '{"a": "1"}'}}
    assert parse_tool_call_arguments(call) == {"a": "1"}
    assert parse_tool_call_arguments({"function": {"name": "f", "arguments": ""}}) == {}


@pytest.mark.parametrize("arguments", ["{oops", "[1, 2]", '"text"'])
def test_parse_tool_call_arguments_errors(arguments):
    with pytest.raises(ParseError) as exc_info:
        parse_tool_call_arguments({"function": {"name": "f", "arguments": arguments}})
    assert exc_info.value.tool_name == "f"


def test_create_tool_message():
    assert create_tool_message("ok", "call_1", "say_ok") == {
        "role": "tool",
        "content": "ok",
        "name": "say_ok",
        "tool_call_id": "call_1",
    }


def test_to_dict_from_attributes():
    class Bag:
        def __init__(self):
            self.role = "assistant"
            self.content = None
            self._private = 1

    assert to_dict(Bag()) == {"role": "assistant"}
    assert to_dict({"role": "user"}) == {"role": "user"}


def test_debug_log_levels(caplog):
    logger = logging.getLogger("swarmlet.test")
    with caplog.at_level(logging.INFO, logger="swarmlet.test"):
        debug_log(logger, False, "hidden %s", 1)
        debug_log(logger, True, "shown %s", 2)
    assert [r.getMessage() for r in caplog.records] == ["shown 2"]


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:8000/v1")
    monkeypatch.setenv("SWARMLET_MODEL", "local-model")
    monkeypatch.setenv("SWARMLET_LOG_LEVEL", "debug")

    assert get_settings() == Settings(
        api_key="sk-test",
        base_url="http://localhost:8000/v1",
        model="local-model",
        log_level="DEBUG",
    )


def test_settings_defaults(monkeypatch):
    for var in ("OPENAI_API_KEY", "OPENAI_BASE_URL", "SWARMLET_MODEL", "SWARMLET_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    assert get_settings() == Settings()
    assert Settings().model == "gpt-4o"
