from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any

from ..base import ToolContext, ToolResult, ToolSpec, as_int, parse_payload
from ...automation.decoding import split_fields, split_records
from ...automation.errors import AutomationError
from ...automation import scripts

DEFAULT_SEARCH_LIMIT = 10


@dataclass
class SearchArgs:
    query: str
    limit: int | None = None

    @staticmethod
    def from_obj(obj: Any) -> "SearchArgs | None":
        if not isinstance(obj, dict):
            return None
        query = obj.get("query")
        if not isinstance(query, str):
            return None
        raw_limit = obj.get("limit")
        limit = None
        if raw_limit is not None:
            limit = as_int(raw_limit)
            if limit is None:
                return None
        return SearchArgs(query=query, limit=limit)


@dataclass
class PlaySongArgs:
    song: str

    @staticmethod
    def from_obj(obj: Any) -> "PlaySongArgs | None":
        if not isinstance(obj, dict):
            return None
        song = obj.get("song")
        if not isinstance(song, str):
            return None
        return PlaySongArgs(song=song)


@dataclass
class SearchSongsTool:
    spec: ToolSpec = ToolSpec(
        name="search_songs",
        description="Search for songs in your library",
        permission_policy="auto",
        parameters={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "Search query"},
                "limit": {"type": "integer", "description": "Max results (default: 10)"},
            },
            "required": ["query"],
        },
    )

    def execute(self, ctx: ToolContext, payload: str) -> ToolResult:
        args = SearchArgs.from_obj(parse_payload(payload))
        if args is None:
            return ToolResult.error('Invalid arguments. Expected: {"query": "search term"}')

        limit = args.limit
        if limit is None:
            limit = ctx.config.default_search_limit if ctx.config else DEFAULT_SEARCH_LIMIT
        try:
            out = ctx.runner.run(scripts.search_songs_script(args.query, limit, ctx.app))
        except AutomationError as e:
            return ToolResult(e.to_json(), is_error=True)

        results = [
            {"name": r[0], "artist": r[1], "album": r[2]}
            for r in split_records(out, 3)
        ]
        return ToolResult.ok({"results": results, "count": len(results)})


@dataclass
class PlaySongTool:
    spec: ToolSpec = ToolSpec(
        name="play_song",
        description="Search and play a specific song",
        permission_policy="ask",
        parameters={
            "type": "object",
            "properties": {
                "song": {"type": "string", "description": "Song name to search and play"},
            },
            "required": ["song"],
        },
    )

    def execute(self, ctx: ToolContext, payload: str) -> ToolResult:
        args = PlaySongArgs.from_obj(parse_payload(payload))
        if args is None:
            return ToolResult.error('Invalid arguments. Expected: {"song": "song name"}')

        try:
            out = ctx.runner.run(scripts.play_song_script(args.song, ctx.app))
        except AutomationError as e:
            return ToolResult(e.to_json(), is_error=True)

        if out == scripts.NOT_FOUND_SENTINEL:
            miss = {"success": False, "error": f"No song found matching '{args.song}'"}
            return ToolResult(json.dumps(miss, ensure_ascii=False), is_error=True)

        parts = split_fields(out, 2)
        if parts is None:
            return ToolResult.ok({"success": True, "message": "Now playing"})
        return ToolResult.ok({"success": True, "playing": {"name": parts[0], "artist": parts[1]}})
