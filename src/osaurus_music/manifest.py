"""Capability manifest, generated from the tool registry.

Tool ids, parameter schemas and permission policies come straight from
each tool's ToolSpec, so the published manifest cannot drift from what
the dispatcher can actually run.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any

from .config.models import PluginMetadata
from .tools.permissions import PermissionConfig
from .tools.registry import ToolRegistry


def build_manifest(
    registry: ToolRegistry,
    metadata: PluginMetadata | None = None,
    permissions: PermissionConfig | None = None,
) -> dict[str, Any]:
    meta = metadata or PluginMetadata()
    perms = permissions or PermissionConfig()
    tools = []
    for spec in registry.list_specs():
        tools.append({
            "id": spec.name,
            "description": spec.description,
            "parameters": spec.parameters,
            "requirements": list(spec.requirements),
            "permission_policy": perms.decide(spec.name, spec.permission_policy),
        })
    out = asdict(meta)
    out["capabilities"] = {"tools": tools}
    return out


def render_manifest(manifest: dict[str, Any]) -> str:
    return json.dumps(manifest, ensure_ascii=False, indent=2)


@dataclass
class ManifestDrift:
    missing_in_registry: list[str] = field(default_factory=list)
    missing_in_manifest: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing_in_registry and not self.missing_in_manifest


def check_manifest(manifest: Any, registry: ToolRegistry) -> ManifestDrift:
    """Compare the tool ids of a (possibly hand-written) manifest with the registry."""
    declared: list[str] = []
    caps = manifest.get("capabilities") if isinstance(manifest, dict) else None
    tools = caps.get("tools") if isinstance(caps, dict) else None
    if isinstance(tools, list):
        for t in tools:
            if isinstance(t, dict) and isinstance(t.get("id"), str):
                declared.append(t["id"])

    registered = registry.names()
    return ManifestDrift(
        missing_in_registry=sorted(set(declared) - set(registered)),
        missing_in_manifest=sorted(set(registered) - set(declared)),
    )
