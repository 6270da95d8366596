"""
Invocation Dispatcher

Routes (capability type, tool id, payload) to a registered tool and
always answers with a JSON string. Nothing raised by a tool crosses
this boundary.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from .tools.base import ToolContext
from .tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

TOOL_CAPABILITY = "tool"


def _error_json(message: str) -> str:
    return json.dumps({"error": message}, ensure_ascii=False)


@dataclass
class Dispatcher:
    registry: ToolRegistry
    ctx: ToolContext

    def invoke(self, capability_type: str, tool_id: str, payload: str) -> str:
        if capability_type != TOOL_CAPABILITY:
            return _error_json(f"Unknown capability type: {capability_type}")

        tool = self.registry.get_optional(tool_id)
        if tool is None:
            logger.info("Unknown tool requested: %s", tool_id)
            return _error_json(f"Unknown tool: {tool_id}")

        try:
            res = tool.execute(self.ctx, payload)
        except Exception as e:
            logger.exception("Tool %s raised", tool_id)
            return _error_json(f"Command failed: {e}")

        if res.is_error:
            logger.debug("Tool %s returned error: %s", tool_id, res.content)
        return res.content
