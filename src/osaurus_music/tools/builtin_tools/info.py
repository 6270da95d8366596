from __future__ import annotations
from dataclasses import dataclass

from ..base import EMPTY_PARAMETERS, ToolContext, ToolResult, ToolSpec
from ...automation.decoding import parse_count, parse_number, split_fields
from ...automation.errors import AutomationError
from ...automation import scripts


@dataclass
class GetCurrentTrackTool:
    spec: ToolSpec = ToolSpec(
        name="get_current_track",
        description="Get currently playing track info",
        parameters=EMPTY_PARAMETERS,
        permission_policy="auto",
    )

    def execute(self, ctx: ToolContext, payload: str) -> ToolResult:
        try:
            out = ctx.runner.run(scripts.current_track_script(ctx.app))
        except AutomationError as e:
            return ToolResult(e.to_json(), is_error=True)

        if out == scripts.STOPPED_SENTINEL:
            return ToolResult.ok({"playing": False, "message": "No track is currently playing"})

        parts = split_fields(out, 6)
        if parts is None:
            return ToolResult.error("Failed to parse track information")
        name, artist, album, duration_s, position_s, state = parts[:6]
        duration = parse_number(duration_s)
        position = parse_number(position_s)
        if duration is None or position is None:
            return ToolResult.error("Failed to parse track information")

        return ToolResult.ok({
            "playing": True,
            "track": {
                "name": name,
                "artist": artist,
                "album": album,
                "duration": duration,
                "position": position,
                "state": state,
            },
        })


@dataclass
class GetLibraryStatsTool:
    spec: ToolSpec = ToolSpec(
        name="get_library_stats",
        description="Get library statistics (track and playlist counts)",
        parameters=EMPTY_PARAMETERS,
        permission_policy="auto",
    )

    def execute(self, ctx: ToolContext, payload: str) -> ToolResult:
        try:
            out = ctx.runner.run(scripts.library_stats_script(ctx.app))
        except AutomationError as e:
            return ToolResult(e.to_json(), is_error=True)

        parts = split_fields(out, 2)
        tracks = parse_count(parts[0]) if parts else None
        playlists = parse_count(parts[1]) if parts else None
        if tracks is None or playlists is None:
            return ToolResult.error("Failed to parse library statistics")
        return ToolResult.ok({"tracks": tracks, "playlists": playlists})
