from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from rich.console import Console

PermissionPolicy = Literal["auto", "ask"]

console = Console(stderr=True)


def as_policy(v: str) -> PermissionPolicy | None:
    v = v.lower().strip()
    if v in {"auto", "ask"}:
        return v  # type: ignore
    return None


@dataclass
class PermissionConfig:
    """Per-tool permission policy.

    A tool's ToolSpec supplies the default; `overrides` (from plugin
    config) win over it.
    """

    overrides: dict[str, PermissionPolicy] = field(default_factory=dict)

    def decide(self, tool_name: str, default: PermissionPolicy) -> PermissionPolicy:
        return self.overrides.get(tool_name, default)


class PermissionGate:
    def __init__(self, config: PermissionConfig, auto_approve: bool = False):
        self.config = config
        self.auto_approve = auto_approve

    def decide(self, spec: Any, args_preview: str) -> bool:
        policy = self.config.decide(spec.name, spec.permission_policy)
        if policy == "auto":
            return True

        # ask
        if self.auto_approve:
            return True

        console.print(f"\n[yellow]Tool requires approval[/yellow]: [bold]{spec.name}[/bold]\n{args_preview}")
        resp = console.input("Approve? [y/N] ").strip().lower()
        return resp in {"y", "yes"}
