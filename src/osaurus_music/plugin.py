from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .automation.runner import AppleScriptRunner, Executor
from .config.loader import load_plugin_config
from .config.models import PluginConfig
from .dispatcher import Dispatcher
from .manifest import build_manifest, render_manifest
from .tools.base import ToolContext
from .tools.builtin import build_builtin_registry
from .tools.permissions import PermissionConfig
from .tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


@dataclass
class PluginContext:
    """One host session: owns the registry, the runner and the dispatcher."""

    config: PluginConfig
    tools: ToolRegistry
    runner: AppleScriptRunner
    dispatcher: Dispatcher
    permissions: PermissionConfig = field(default_factory=PermissionConfig)
    closed: bool = False

    def close(self) -> None:
        self.closed = True

    def manifest(self) -> str:
        return render_manifest(build_manifest(self.tools, self.config.metadata, self.permissions))

    def invoke(self, capability_type: str, tool_id: str, payload: str) -> str:
        if self.closed:
            return json.dumps({"error": "Command failed: plugin context has been destroyed"})
        return self.dispatcher.invoke(capability_type, tool_id, payload)

    @staticmethod
    def from_config(
        config: PluginConfig | None = None,
        executor: Optional[Executor] = None,
    ) -> "PluginContext":
        config = config or PluginConfig()
        tools = build_builtin_registry()
        runner = AppleScriptRunner(
            osascript_path=config.osascript_path,
            app_name=config.app_name,
            timeout=config.timeout,
            executor=executor,
        )
        dispatcher = Dispatcher(registry=tools, ctx=ToolContext(runner=runner, config=config))
        return PluginContext(
            config=config,
            tools=tools,
            runner=runner,
            dispatcher=dispatcher,
            permissions=PermissionConfig(overrides=dict(config.permissions)),
        )


class PluginAPI:
    """The four entry points a plugin host calls.

    Stateless: all state lives in the PluginContext handed back by `init`.
    """

    def init(self, config_path: Path | None = None, cwd: Path | None = None) -> PluginContext:
        try:
            config = load_plugin_config(cwd=cwd, explicit_path=config_path)
        except FileNotFoundError as e:
            logger.warning("%s; using defaults", e)
            config = PluginConfig()
        return PluginContext.from_config(config)

    def destroy(self, ctx: PluginContext | None) -> None:
        if ctx is not None:
            ctx.close()

    def get_manifest(self, ctx: PluginContext | None) -> str:
        if ctx is None:
            return PluginContext.from_config().manifest()
        return ctx.manifest()

    def invoke(self, ctx: PluginContext | None, capability_type: str, tool_id: str, payload: str) -> str:
        if ctx is None:
            return json.dumps({"error": "Command failed: missing plugin context"})
        return ctx.invoke(capability_type, tool_id, payload)


api = PluginAPI()


def plugin_entry() -> PluginAPI:
    return api
