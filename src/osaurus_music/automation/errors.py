"""
Automation Errors

Closed set of failures an osascript call can end in. Each error knows
the JSON object the host should see for it.
"""

from __future__ import annotations

import json
from typing import Any


class AutomationError(Exception):
    """Base class for classified osascript failures."""

    def to_dict(self) -> dict[str, Any]:
        return {"error": str(self)}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


class MusicNotRunningError(AutomationError):
    """The Music app is not running."""

    def __init__(self) -> None:
        super().__init__("Music app is not running. Please open Apple Music first.")


class PermissionDeniedError(AutomationError):
    """macOS refused the Apple Events automation request."""

    def __init__(self) -> None:
        super().__init__(
            "Automation permission denied. Grant Osaurus access in "
            "System Settings > Privacy & Security > Automation."
        )


class ExecutionFailedError(AutomationError):
    """osascript failed for any other reason; carries its raw stderr."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Command failed: {message}")
