from __future__ import annotations

from .registry import ToolRegistry
from .base import Tool

from .builtin_tools.playback import SetVolumeTool, playback_tools
from .builtin_tools.info import GetCurrentTrackTool, GetLibraryStatsTool
from .builtin_tools.search import SearchSongsTool, PlaySongTool

def builtin_tools() -> list[Tool]:
    tools: list[Tool] = []
    # Playback controls
    tools.extend(playback_tools())
    tools.append(SetVolumeTool())
    # Information
    tools.append(GetCurrentTrackTool())
    tools.append(GetLibraryStatsTool())
    # Search
    tools.append(SearchSongsTool())
    tools.append(PlaySongTool())
    return tools

def build_builtin_registry() -> ToolRegistry:
    return ToolRegistry.from_tools(builtin_tools())
