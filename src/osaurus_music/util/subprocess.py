from __future__ import annotations
import subprocess
from dataclasses import dataclass
from typing import Sequence, Optional

@dataclass
class CmdResult:
    returncode: int
    stdout: str
    stderr: str

def run_cmd(cmd: Sequence[str], cwd: Optional[str] = None, timeout: Optional[float] = None) -> CmdResult:
    """Run one process to completion and capture its output.

    A process that cannot be spawned is reported as a failed run
    (returncode 1, the OS error text as stderr) rather than raised.
    Output is decoded as UTF-8; invalid bytes become U+FFFD.
    """
    try:
        p = subprocess.run(
            list(cmd),
            cwd=cwd,
            encoding="utf-8",
            errors="replace",
            capture_output=True,
            timeout=timeout,
            shell=False,
        )
    except OSError as e:
        return CmdResult(1, "", str(e))
    except subprocess.TimeoutExpired:
        return CmdResult(1, "", f"timed out after {timeout}s")
    return CmdResult(p.returncode, p.stdout or "", p.stderr or "")
