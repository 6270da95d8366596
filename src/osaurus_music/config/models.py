from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..tools.permissions import PermissionPolicy, as_policy

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class PluginMetadata:
    plugin_id: str = "osaurus.music"
    name: str = "Apple Music"
    version: str = "0.1.0"
    description: str = "Control Apple Music playback, search your library, and get track information"
    license: str = "MIT"
    authors: list[str] = field(default_factory=list)
    min_macos: str = "15.0"
    min_osaurus: str = "0.5.0"


@dataclass
class PluginConfig:
    """Plugin settings loaded from JSON/YAML.

    Every field has a working default, so an empty config is valid.
    """

    osascript_path: str = "/usr/bin/osascript"
    app_name: str = "Music"
    default_search_limit: int = 10
    timeout: float | None = None
    log_level: str = "WARNING"
    permissions: dict[str, PermissionPolicy] = field(default_factory=dict)
    metadata: PluginMetadata = field(default_factory=PluginMetadata)

    loaded_from: Path | None = None

    @staticmethod
    def from_obj(obj: Any) -> "PluginConfig":
        cfg = PluginConfig()
        if not isinstance(obj, dict):
            return cfg

        p = obj.get("osascript_path")
        if isinstance(p, str) and p.strip():
            cfg.osascript_path = p.strip()

        app = obj.get("app_name")
        if isinstance(app, str) and app.strip():
            cfg.app_name = app.strip()

        lim = obj.get("default_search_limit")
        if isinstance(lim, int) and not isinstance(lim, bool) and lim > 0:
            cfg.default_search_limit = lim

        t = obj.get("timeout")
        if isinstance(t, (int, float)) and not isinstance(t, bool) and t > 0:
            cfg.timeout = float(t)

        lvl = obj.get("log_level")
        if isinstance(lvl, str) and lvl.strip().upper() in _LOG_LEVELS:
            cfg.log_level = lvl.strip().upper()

        perms = obj.get("permissions", {})
        if isinstance(perms, dict):
            for tool_id, v in perms.items():
                pol = as_policy(v) if isinstance(v, str) else None
                if isinstance(tool_id, str) and pol is not None:
                    cfg.permissions[tool_id] = pol

        meta = obj.get("metadata", {})
        if isinstance(meta, dict):
            for key in ("plugin_id", "name", "version", "description", "license", "min_macos", "min_osaurus"):
                v = meta.get(key)
                if isinstance(v, str) and v.strip():
                    setattr(cfg.metadata, key, v.strip())
            authors = meta.get("authors")
            if isinstance(authors, list):
                cfg.metadata.authors = [str(a) for a in authors]

        return cfg
