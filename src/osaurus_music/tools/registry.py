from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .base import Tool, ToolSpec

@dataclass(frozen=True)
class ToolRegistry:
    """Tool id -> Tool, built once and read-only afterwards.

    Nothing mutates the mapping after `from_tools`, so concurrent
    lookups need no locking.
    """

    _tools: Mapping[str, Tool] = field(default_factory=lambda: MappingProxyType({}))

    @staticmethod
    def from_tools(tools: Iterable[Tool]) -> "ToolRegistry":
        table: dict[str, Tool] = {}
        for tool in tools:
            name = tool.spec.name
            if name in table:
                raise ValueError(f"Tool already registered: {name}")
            table[name] = tool
        return ToolRegistry(_tools=MappingProxyType(table))

    def get(self, name: str) -> Tool:
        if name not in self._tools:
            raise KeyError(f"Unknown tool: {name}")
        return self._tools[name]

    def get_optional(self, name: str) -> Optional[Tool]:
        """Return a tool if registered, otherwise None."""
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools.keys())

    def list_specs(self) -> list[ToolSpec]:
        return [t.spec for t in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
