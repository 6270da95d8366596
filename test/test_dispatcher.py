from __future__ import annotations

import json

import pytest

from osaurus_music.automation.runner import AppleScriptRunner
from osaurus_music.dispatcher import Dispatcher
from osaurus_music.tools.base import EMPTY_PARAMETERS, ToolContext, ToolResult, ToolSpec
from osaurus_music.tools.builtin import build_builtin_registry
from osaurus_music.tools.registry import ToolRegistry

from conftest import FakeOsascript


class ExplodingTool:
    spec = ToolSpec(name="explode", description="raises", parameters=EMPTY_PARAMETERS)

    def execute(self, ctx, payload):
        raise RuntimeError('boom "bad"')


class UntouchableRegistry:
    def get_optional(self, name):
        raise AssertionError("registry must not be consulted")


def _dispatcher(registry, osa=None) -> Dispatcher:
    runner = AppleScriptRunner(executor=osa or FakeOsascript())
    return Dispatcher(registry=registry, ctx=ToolContext(runner=runner))


@pytest.mark.parametrize("tool_id", ["", "stop", "PLAY", "play ", "search"])
def test_unknown_tool(tool_id):
    d = _dispatcher(build_builtin_registry())
    assert json.loads(d.invoke("tool", tool_id, "{}")) == {"error": f"Unknown tool: {tool_id}"}


@pytest.mark.parametrize("capability", ["resource", "", "Tool", "tools"])
def test_unsupported_capability_does_not_touch_registry(capability):
    d = _dispatcher(UntouchableRegistry())  # type: ignore[arg-type]
    out = json.loads(d.invoke(capability, "play", "{}"))
    assert out == {"error": f"Unknown capability type: {capability}"}


def test_tool_exception_becomes_json_error():
    d = _dispatcher(ToolRegistry.from_tools([ExplodingTool()]))
    out = json.loads(d.invoke("tool", "explode", "{}"))
    assert out == {"error": 'Command failed: boom "bad"'}


def test_tool_result_is_returned_verbatim():
    class Fixed:
        spec = ToolSpec(name="fixed", description="", parameters=EMPTY_PARAMETERS)

        def execute(self, ctx, payload):
            return ToolResult('{"a": 1}')

    d = _dispatcher(ToolRegistry.from_tools([Fixed()]))
    assert d.invoke("tool", "fixed", "") == '{"a": 1}'


@pytest.mark.parametrize("tool_id", sorted(build_builtin_registry().names()))
@pytest.mark.parametrize("payload", ["", "{", "null", '{"level": "x", "query": 1, "song": 2}', "\x00"])
def test_every_tool_returns_valid_json_for_garbage(tool_id, payload):
    d = _dispatcher(build_builtin_registry(), FakeOsascript())
    json.loads(d.invoke("tool", tool_id, payload))
