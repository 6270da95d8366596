from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from ..util.subprocess import CmdResult, run_cmd
from .errors import (
    AutomationError,
    ExecutionFailedError,
    MusicNotRunningError,
    PermissionDeniedError,
)
from .scripts import music_running_script

logger = logging.getLogger(__name__)

Executor = Callable[[Sequence[str]], CmdResult]

# Evaluated top to bottom against lowercased stderr; first match wins.
#
#   substring          -> error
#   "not authorized"   -> PermissionDeniedError
#   "not allowed"      -> PermissionDeniedError
#   "isn't running"    -> MusicNotRunningError
#   (anything else)    -> ExecutionFailedError(stderr)
CLASSIFICATION_RULES: tuple[tuple[str, type[AutomationError]], ...] = (
    ("not authorized", PermissionDeniedError),
    ("not allowed", PermissionDeniedError),
    ("isn't running", MusicNotRunningError),
)


def classify_failure(stderr: str) -> AutomationError:
    """Map the stderr of a failed osascript run to a classified error."""
    text = (stderr or "").lower()
    for needle, err_cls in CLASSIFICATION_RULES:
        if needle in text:
            return err_cls()
    return ExecutionFailedError(stderr)


@dataclass
class AppleScriptRunner:
    """Runs AppleScript through osascript, one blocking process per call.

    `executor` is the process boundary; tests swap it for a fake.
    """

    osascript_path: str = "/usr/bin/osascript"
    app_name: str = "Music"
    timeout: Optional[float] = None
    executor: Optional[Executor] = field(default=None, repr=False)

    def _exec(self, script: str) -> CmdResult:
        cmd = [self.osascript_path, "-e", script]
        if self.executor is not None:
            return self.executor(cmd)
        return run_cmd(cmd, timeout=self.timeout)

    def is_music_running(self) -> bool:
        # Best effort: a failing System Events query reads as "not running".
        res = self._exec(music_running_script(self.app_name))
        return res.stdout.strip() == "true"

    def run(self, script: str, requires_music_running: bool = True) -> str:
        """Run `script` and return its trimmed stdout.

        Raises an AutomationError subclass on failure. When
        `requires_music_running` is set and the app is not running, the
        script is never executed.
        """
        if requires_music_running and not self.is_music_running():
            logger.info("%s is not running; skipping script", self.app_name)
            raise MusicNotRunningError()

        logger.debug("osascript: %s", script)
        res = self._exec(script)

        if res.returncode != 0:
            err = classify_failure(res.stderr)
            logger.warning("osascript exited %s: %s", res.returncode, type(err).__name__)
            raise err

        return res.stdout.strip()
