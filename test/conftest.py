from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Sequence

import pytest

from osaurus_music.config.models import PluginConfig
from osaurus_music.plugin import PluginContext
from osaurus_music.util.subprocess import CmdResult


def reply(stdout: str = "", stderr: str = "", code: int = 0) -> CmdResult:
    return CmdResult(code, stdout, stderr)


@dataclass
class FakeOsascript:
    """Stands in for the osascript process.

    The System Events availability probe is answered from `running`;
    every other script is recorded in `calls` and answered from `replies`.
    """

    running: bool = True
    replies: list[CmdResult] = field(default_factory=list)
    default: CmdResult = field(default_factory=lambda: CmdResult(0, "", ""))
    calls: list[str] = field(default_factory=list)
    commands: list[list[str]] = field(default_factory=list)
    probes: int = 0

    def __call__(self, cmd: Sequence[str]) -> CmdResult:
        cmd = list(cmd)
        self.commands.append(cmd)
        script = cmd[-1]
        if script.startswith('tell application "System Events"'):
            self.probes += 1
            return CmdResult(0, "true\n" if self.running else "false\n", "")
        self.calls.append(script)
        if self.replies:
            return self.replies.pop(0)
        return self.default

    def queue(self, *results: CmdResult) -> "FakeOsascript":
        self.replies.extend(results)
        return self


@pytest.fixture
def osa():
    return FakeOsascript()


@pytest.fixture
def plugin(osa):
    return PluginContext.from_config(PluginConfig(), executor=osa)


@pytest.fixture
def call(plugin):
    """Invoke a tool through the dispatcher and decode the JSON it returns."""

    def _call(tool_id: str, payload: str = "{}"):
        return json.loads(plugin.invoke("tool", tool_id, payload))

    return _call
