from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from ..base import EMPTY_PARAMETERS, ToolContext, ToolResult, ToolSpec, as_int, parse_payload
from ...automation.errors import AutomationError
from ...automation import scripts


class SimpleCommandTool:
    """Runs one fixed Music command and reports a fixed message. Ignores its payload."""

    def __init__(
        self,
        name: str,
        *,
        command: str,
        message: str,
        description: str,
        requires_music_running: bool = True,
    ):
        self.command = command
        self.message = message
        self.spec = ToolSpec(
            name=name,
            description=description,
            parameters=EMPTY_PARAMETERS,
            permission_policy="auto",
            requires_music_running=requires_music_running,
        )

    def execute(self, ctx: ToolContext, payload: str) -> ToolResult:
        script = scripts.simple_command_script(self.command, ctx.app)
        try:
            ctx.runner.run(script, requires_music_running=self.spec.requires_music_running)
        except AutomationError as e:
            return ToolResult(e.to_json(), is_error=True)
        return ToolResult.ok({"success": True, "message": self.message})


def playback_tools() -> list[SimpleCommandTool]:
    return [
        SimpleCommandTool("open_music", command="activate", message="Apple Music opened",
                          description="Open Apple Music app", requires_music_running=False),
        SimpleCommandTool("play", command="play", message="Playback started",
                          description="Resume or start music playback"),
        SimpleCommandTool("pause", command="pause", message="Playback paused",
                          description="Pause music playback"),
        SimpleCommandTool("next_track", command="next track", message="Skipped to next track",
                          description="Skip to the next track"),
        SimpleCommandTool("previous_track", command="previous track", message="Went to previous track",
                          description="Go to the previous track"),
    ]


@dataclass
class SetVolumeArgs:
    level: int

    @staticmethod
    def from_obj(obj: Any) -> "SetVolumeArgs | None":
        if not isinstance(obj, dict):
            return None
        level = as_int(obj.get("level"))
        if level is None:
            return None
        return SetVolumeArgs(level=level)


@dataclass
class SetVolumeTool:
    spec: ToolSpec = ToolSpec(
        name="set_volume",
        description="Set volume level (0-100)",
        permission_policy="auto",
        parameters={
            "type": "object",
            "properties": {
                "level": {"type": "integer", "description": "Volume level from 0 to 100"},
            },
            "required": ["level"],
        },
    )

    def execute(self, ctx: ToolContext, payload: str) -> ToolResult:
        args = SetVolumeArgs.from_obj(parse_payload(payload))
        if args is None:
            return ToolResult.error('Invalid arguments. Expected: {"level": 0-100}')

        level = max(0, min(100, args.level))
        try:
            ctx.runner.run(scripts.set_volume_script(level, ctx.app))
        except AutomationError as e:
            return ToolResult(e.to_json(), is_error=True)
        return ToolResult.ok({"success": True, "volume": level})
