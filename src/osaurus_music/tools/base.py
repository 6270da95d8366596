from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Protocol, TYPE_CHECKING

from .permissions import PermissionPolicy

if TYPE_CHECKING:
    from ..automation.runner import AppleScriptRunner
    from ..config.models import PluginConfig

EMPTY_PARAMETERS: dict[str, Any] = {"type": "object", "properties": {}}

@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    parameters: dict[str, Any]   # JSONSchema
    permission_policy: PermissionPolicy = "auto"
    requires_music_running: bool = True
    requirements: tuple[str, ...] = ("automation",)

class Tool(Protocol):
    spec: ToolSpec
    def execute(self, ctx: "ToolContext", payload: str) -> "ToolResult": ...

@dataclass
class ToolResult:
    content: str   # JSON text handed back to the host
    is_error: bool = False

    @staticmethod
    def ok(obj: dict[str, Any]) -> "ToolResult":
        return ToolResult(json.dumps(obj, ensure_ascii=False))

    @staticmethod
    def error(message: str) -> "ToolResult":
        return ToolResult(json.dumps({"error": message}, ensure_ascii=False), is_error=True)

@dataclass
class ToolContext:
    runner: "AppleScriptRunner"
    config: "PluginConfig | None" = field(default=None)

    @property
    def app(self) -> str:
        return self.runner.app_name

def parse_payload(payload: str) -> dict[str, Any] | None:
    """Decode a JSON payload into an object; None if it is not one."""
    try:
        obj = json.loads(payload) if payload else None
    except (TypeError, ValueError):
        return None
    return obj if isinstance(obj, dict) else None

def as_int(v: Any) -> int | None:
    # JSON integers only; bools are not numbers here, integral floats are.
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return None
